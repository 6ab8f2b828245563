"""FastAPI dependencies."""
from fastapi import Request

from songbooth.storage.base import RequestStore


def get_store(request: Request) -> RequestStore:
    """The store built by the app lifespan."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Request store not available on app.state (lifespan not initialized).")
    return store
