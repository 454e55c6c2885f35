from .email import EmailProvider  # noqa: F401
