"""Registry mapping wire-level resource type names to decoders.

Included resources are heterogeneous: the `type` member of each entry picks
the decoder at runtime.

Example:
    ```python
    from jsonapi_client_core.document import default_registry

    default_registry.register("people", Person.from_json)
    person = default_registry.decode({"type": "people", "id": "9", ...})
    ```
"""

import logging
from collections.abc import Callable, Mapping
from threading import Lock
from typing import TYPE_CHECKING, Any

from jsonapi_client_core.errors.exceptions import UnknownResourceTypeError

if TYPE_CHECKING:
    from jsonapi_client_core.document.resource import Resource

logger = logging.getLogger(__name__)

ResourceDecoder = Callable[[Mapping[str, Any]], "Resource"]


class ResourceRegistry:
    """Thread-safe `type name -> decoder` table.

    Registrations are additive; registering a name again replaces its decoder.
    """

    def __init__(self) -> None:
        self._decoders: dict[str, ResourceDecoder] = {}
        self._lock = Lock()

    def register(self, type_name: str, decoder: ResourceDecoder) -> None:
        with self._lock:
            if type_name in self._decoders:
                logger.debug(f"Replacing decoder registered for resource type {type_name!r}")
            self._decoders[type_name] = decoder

    def resolve(self, type_name: str) -> ResourceDecoder:
        """Return the decoder for `type_name`.

        Raises:
            UnknownResourceTypeError: If nothing is registered under that name.
        """
        with self._lock:
            decoder = self._decoders.get(type_name)
        if decoder is None:
            error = UnknownResourceTypeError(type_name)
            logger.error(str(error))
            raise error
        return decoder

    def decode(self, payload: Mapping[str, Any]) -> "Resource":
        """Decode a resource object with the decoder selected by its `type` member."""
        if not isinstance(payload, Mapping) or not isinstance(payload.get("type"), str):
            raise ValueError("Resource object must be a JSON object with a string 'type'")
        return self.resolve(payload["type"])(payload)

    def registered_types(self) -> list[str]:
        with self._lock:
            return list(self._decoders)

    def __contains__(self, type_name: object) -> bool:
        with self._lock:
            return type_name in self._decoders


# Process-wide registry used unless a client or document is given its own.
default_registry = ResourceRegistry()
