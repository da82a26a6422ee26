from abc import ABC, abstractmethod
from threading import Lock


class PageCache(ABC):
    @abstractmethod
    def revalidate_path(self, path: str) -> None:
        raise NotImplementedError


class RenderedPageCache(PageCache):
    """Rendered HTML bodies keyed by request path.

    Each path carries a generation bumped by ``revalidate_path``. A body
    rendered under an older generation is discarded by ``set``, so a render
    that overlaps a write cannot repopulate the cache with stale rows.
    """

    def __init__(self) -> None:
        self._pages: dict[str, str] = {}
        self._generations: dict[str, int] = {}
        self._lock = Lock()

    def get(self, path: str) -> str | None:
        with self._lock:
            return self._pages.get(path)

    def generation(self, path: str) -> int:
        with self._lock:
            return self._generations.get(path, 0)

    def set(self, path: str, body: str, generation: int) -> bool:
        with self._lock:
            if self._generations.get(path, 0) != generation:
                return False
            self._pages[path] = body
            return True

    def revalidate_path(self, path: str) -> None:
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            self._pages.pop(path, None)

    def clear(self) -> None:
        with self._lock:
            self._pages.clear()


page_cache = RenderedPageCache()


def get_page_cache() -> RenderedPageCache:
    return page_cache
