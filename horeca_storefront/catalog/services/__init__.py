from .api_client import BackendApiClient, get_client
from .exceptions import (
    BackendApiError,
    BackendUnavailableError,
    NotFoundError,
    StorefrontServiceError,
)
from .page_cache import cached_page_data, revalidate_path
from .server_api import revalidate_tag

__all__ = [
    "BackendApiClient",
    "get_client",
    "BackendApiError",
    "BackendUnavailableError",
    "NotFoundError",
    "StorefrontServiceError",
    "cached_page_data",
    "revalidate_path",
    "revalidate_tag",
]
