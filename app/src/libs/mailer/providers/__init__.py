from .smtp import SMTPProvider  # noqa: F401
