"""
Request-scoped key/value store.

The context lives on ``request.state`` for the duration of one request: the
middleware writes to it, handlers read from it, and it is dropped together
with the request.
"""

from typing import Any, Dict, Iterator, Tuple

from fastapi import Request

STATE_ATTRIBUTE = "context"


class RequestContext:
    """Key/value annotations attached to a single request."""

    def __init__(self):
        self._values: Dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        """Store a value under key, replacing any previous one."""
        self._values[key] = value

    def get(self, key: str) -> Tuple[Any, bool]:
        """Return ``(value, True)`` when key is set, ``(None, False)`` otherwise."""
        if key in self._values:
            return self._values[key], True
        return None, False

    def must_get(self, key: str) -> Any:
        """Return the value for key, raising ``KeyError`` when it is absent."""
        value, found = self.get(key)
        if not found:
            raise KeyError(f"Key {key!r} does not exist in the request context")
        return value

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)


def get_request_context(request: Request) -> RequestContext:
    """
    Return the context of a request, creating it on first use.

    Usable directly or as a FastAPI dependency.
    """
    context = getattr(request.state, STATE_ATTRIBUTE, None)
    if context is None:
        context = RequestContext()
        setattr(request.state, STATE_ATTRIBUTE, context)
    return context
