from typing import Any, ClassVar

from pydantic import Field
from src.libs.notifications import EmailNotification


class StoreDynamicEmailNotification(EmailNotification):
    """
    Email carrying a storefront form submission (contact us, feedback, ...) to the store.

    Attributes:
        form_type (str | None): The kind of form that was submitted.
        fields (dict[str, str]): The submitted form fields.
    """

    template_base: ClassVar[str] = "v1/stores/dynamic_notification"

    form_type: str | None = None
    fields: dict[str, str] = Field(default_factory=dict)

    def get_subject(self) -> str:
        return self.subject or f"{self.form_type or 'Form'} submission"

    def get_template_context(self) -> dict[str, Any]:
        context = super().get_template_context()
        context.update(
            store_id=self.object_id,
            form_type=self.form_type,
            fields=self.fields,
        )
        return context
