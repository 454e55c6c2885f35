from .store_converter import to_core_model, to_web_model  # noqa: F401
