"""FastAPI dependencies for process-wide clients built in main.lifespan."""
from fastapi import Request

from cinexnema.errors import ConfigurationMissing
from cinexnema.services.storage import ObjectStorage


def get_optional_storage(request: Request) -> ObjectStorage | None:
    return getattr(request.app.state, "storage", None)


def get_storage(request: Request) -> ObjectStorage:
    """The shared ObjectStorage. CONFIGURATION_MISSING when storage credentials are not set."""
    storage = get_optional_storage(request)
    if storage is None:
        raise ConfigurationMissing("Object storage is not configured (STORAGE_ENDPOINT / keys).")
    return storage
