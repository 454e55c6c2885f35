from .memory import InMemoryGatewayCatalog  # noqa: F401
