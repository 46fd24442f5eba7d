"""Client configuration: the service delegate and settings resolution.

Example:
    ```python
    from jsonapi_client_core.config import StaticDelegate

    delegate = StaticDelegate(api_endpoint="https://api.example.com/", access_token="token")
    ```
"""

from jsonapi_client_core.config.delegate import PaginationParams, ServiceDelegate, StaticDelegate
from jsonapi_client_core.config.settings import SettingsResolver, load_delegate

__all__ = [
    "PaginationParams",
    "ServiceDelegate",
    "SettingsResolver",
    "StaticDelegate",
    "load_delegate",
]
