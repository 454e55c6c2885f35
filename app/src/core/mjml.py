from pathlib import Path
from typing import Any

import mjml
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemBytecodeCache, FileSystemLoader, Template, select_autoescape
from src.core.config import settings
from src.core.templates.utils import setup_template_environment


class MjmlTemplate(Template):
    """Jinja2 template whose rendered MJML markup is compiled to HTML."""

    def render(self, *args: Any, **kwargs: Any) -> str:
        markup = super().render(*args, **kwargs)
        return mjml.mjml2html(markup)


class MjmlEnvironment(Environment):
    """Jinja2 environment producing `MjmlTemplate`s."""

    template_class = MjmlTemplate


MJML_CACHE_PATH = Path(settings.BASE_DIR) / ".mjml_cache"

if not MJML_CACHE_PATH.exists():
    MJML_CACHE_PATH.mkdir(parents=True)
    MJML_CACHE_PATH.chmod(0o700)

MJML_ENVIRONMENT = MjmlEnvironment(
    loader=FileSystemLoader(settings.MJML_TEMPLATES_DIR),
    auto_reload=settings.ENVIRONMENT == "local",
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
    cache_size=1000,
    bytecode_cache=FileSystemBytecodeCache(directory=str(MJML_CACHE_PATH)),
)

mjml_templates = Jinja2Templates(env=MJML_ENVIRONMENT)

setup_template_environment(mjml_templates.env)
