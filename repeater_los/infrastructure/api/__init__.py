from .clients import AsyncElevationsApiClient
from .decorators import async_retry

__all__ = ["AsyncElevationsApiClient", "async_retry"]
