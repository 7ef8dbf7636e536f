import logging
from typing import Callable, Dict, List

log = logging.getLogger(__name__)


class PathRevalidator:
    """Invalidates cached views of the list and detail surfaces."""

    def __init__(self):
        # Insertion-ordered set of paths invalidated since the last drain()
        self._pending: Dict[str, None] = {}
        self._listeners: List[Callable[[str], None]] = []

    def subscribe(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def revalidate(self, path: str) -> None:
        self._pending[path] = None
        log.info("Revalidated %s", path, extra={"action": "revalidate"})
        for listener in self._listeners:
            listener(path)

    def drain(self) -> List[str]:
        """Return the paths invalidated since the last call and forget them."""
        paths = list(self._pending)
        self._pending.clear()
        return paths
