from .auditable import AuditableMixin  # noqa: F401
from .id import IntegerIDMixin, StringIDMixin  # noqa: F401
