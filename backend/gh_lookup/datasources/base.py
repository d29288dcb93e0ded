from typing import Any, Dict, Optional, Protocol

from ..schemas import Mode


class FetchError(RuntimeError):
    """A lookup that did not produce a usable body (non-2xx, transport, decoding)."""

    def __init__(self, mode: Mode, name: str, detail: str, status_code: Optional[int] = None):
        super().__init__(detail)
        self.mode = mode
        self.name = name
        self.status_code = status_code


class LookupSource(Protocol):
    async def fetch(self, mode: Mode, name: str) -> Dict[str, Any]:
        ...
