"""Visited-set and frontier bookkeeping for a traversal run."""

from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional, Tuple
import threading


class VisitedSet:
    """URLs whose fetch has been attempted in the current run.

    Only grows during a run. ``mark`` is an atomic check-and-mark so a
    parallel fetcher could share one instance without fetching twice.
    """

    def __init__(self):
        self._urls = set()
        self._order: List[str] = []
        self._lock = threading.Lock()

    def mark(self, url: str) -> bool:
        """Mark url as visited; False if it already was."""
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            self._order.append(url)
            return True

    def __contains__(self, url: str) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self.in_order())

    def in_order(self) -> List[str]:
        """Visited URLs in the order they were marked."""
        with self._lock:
            return list(self._order)

    def clear(self) -> None:
        """Forget everything; only for the start of a new run."""
        with self._lock:
            self._urls.clear()
            self._order.clear()


class Frontier:
    """Pending ``(url, depth)`` entries.

    FIFO for breadth-first traversal, LIFO when used as the explicit work
    stack of the depth-first crawler. Entries are not deduplicated on
    insert; consumers re-check the visited set when popping.
    """

    def __init__(self, lifo: bool = False, entries: Optional[Iterable[Tuple[str, int]]] = None):
        self.lifo = lifo
        self._entries: Deque[Tuple[str, int]] = deque(entries or [])

    def push(self, url: str, depth: int = 0) -> None:
        self._entries.append((url, depth))

    def pop(self) -> Tuple[str, int]:
        """Next entry to process; raises IndexError when empty."""
        if self.lifo:
            return self._entries.pop()
        return self._entries.popleft()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
