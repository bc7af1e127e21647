"""Binary min-heap with stable handles and in-place key decrease."""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterator, List, Optional, Tuple, TypeVar

from .exceptions import EmptyCollectionError, InvalidOperationError

T = TypeVar("T")
Handle = int


def _identity(entry: Any) -> Any:
    return entry


class IndexedMinHeap(Generic[T]):
    """Array-backed binary min-heap addressable through insertion handles.

    ``insert`` returns an integer handle that keeps naming the same entry while
    sift operations move it around the array. Handles are resolved through a
    ``handle -> slot`` table, so :meth:`decrease` and :meth:`remove` run in
    ``O(log n)`` without scanning.

    Entries are ordered by ``key(entry)``; ties are left in whatever order the
    sift operations produce.

    Args:
        key: Callable returning the priority of an entry. Defaults to the
            entry itself.

    Examples:
        ```python
        >>> h = IndexedMinHeap()
        >>> a = h.insert(5)
        >>> b = h.insert(3)
        >>> h.decrease(a, 1)
        >>> h.pop_min(), h.pop_min()
        (1, 3)
        ```
    """

    def __init__(self, key: Optional[Callable[[T], Any]] = None) -> None:
        """Create an empty heap."""
        self._key: Callable[[T], Any] = key or _identity
        self._slots: List[Handle] = []
        self._entries: List[Optional[T]] = []
        self._pos: List[int] = []  # -1 once the handle's entry is gone

    # ---- internals ----------------------------------------------------

    def _check(self, handle: Handle) -> None:
        if not (0 <= handle < len(self._pos)) or self._pos[handle] < 0:
            raise InvalidOperationError(f"handle {handle!r} does not name a live entry")

    def _sift_up(self, i: int) -> int:
        slots, pos, entries, key = self._slots, self._pos, self._entries, self._key
        handle = slots[i]
        k = key(entries[handle])
        while i > 0:
            parent = (i - 1) >> 1
            ph = slots[parent]
            if not k < key(entries[ph]):
                break
            slots[i] = ph
            pos[ph] = i
            i = parent
        slots[i] = handle
        pos[handle] = i
        return i

    def _sift_down(self, i: int) -> int:
        slots, pos, entries, key = self._slots, self._pos, self._entries, self._key
        n = len(slots)
        handle = slots[i]
        k = key(entries[handle])
        while True:
            child = 2 * i + 1
            if child >= n:
                break
            right = child + 1
            ck = key(entries[slots[child]])
            if right < n:
                rk = key(entries[slots[right]])
                if rk < ck:
                    child, ck = right, rk
            if not ck < k:
                break
            ch = slots[child]
            slots[i] = ch
            pos[ch] = i
            i = child
        slots[i] = handle
        pos[handle] = i
        return i

    def _detach(self, i: int) -> T:
        slots = self._slots
        handle = slots[i]
        last = slots.pop()
        if i < len(slots):
            slots[i] = last
            self._pos[last] = i
            self._sift_down(self._sift_up(i))
        self._pos[handle] = -1
        entry = self._entries[handle]
        self._entries[handle] = None
        return entry  # type: ignore[return-value]

    # ---- public API ---------------------------------------------------

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, handle: object) -> bool:
        return (
            isinstance(handle, int)
            and 0 <= handle < len(self._pos)
            and self._pos[handle] >= 0
        )

    def __getitem__(self, handle: Handle) -> T:
        self._check(handle)
        return self._entries[handle]  # type: ignore[return-value]

    def is_empty(self) -> bool:
        """Return ``True`` if the heap holds no entries."""
        return not self._slots

    def items(self) -> Iterator[Tuple[Handle, T]]:
        """Iterate over live ``(handle, entry)`` pairs in array order."""
        for handle in self._slots:
            yield handle, self._entries[handle]  # type: ignore[misc]

    def top(self) -> T:
        """Return the minimum entry without removing it.

        Raises:
            EmptyCollectionError: If the heap is empty.
        """
        if not self._slots:
            raise EmptyCollectionError("top of an empty heap")
        return self._entries[self._slots[0]]  # type: ignore[return-value]

    def insert(self, entry: T) -> Handle:
        """Add ``entry`` and return a handle that stays valid until it is removed."""
        handle = len(self._entries)
        self._entries.append(entry)
        self._pos.append(len(self._slots))
        self._slots.append(handle)
        self._sift_up(len(self._slots) - 1)
        return handle

    def decrease(self, handle: Handle, entry: T) -> None:
        """Replace the entry at ``handle`` with one of lower or equal priority.

        Args:
            handle: Handle returned by :meth:`insert`.
            entry: Replacement entry.

        Raises:
            InvalidOperationError: If ``handle`` is not live or ``entry`` has a
                higher priority than the entry it replaces.
        """
        self._check(handle)
        if self._key(self._entries[handle]) < self._key(entry):  # type: ignore[arg-type]
            raise InvalidOperationError(
                f"decrease would raise the priority of handle {handle}"
            )
        self._entries[handle] = entry
        self._sift_up(self._pos[handle])

    def pop_min(self) -> T:
        """Remove and return the entry with the smallest priority.

        Raises:
            EmptyCollectionError: If the heap is empty.
        """
        if not self._slots:
            raise EmptyCollectionError("pop_min from an empty heap")
        return self._detach(0)

    def remove(self, handle: Handle) -> T:
        """Remove the entry at ``handle`` and return it.

        Raises:
            InvalidOperationError: If ``handle`` is not live.
        """
        self._check(handle)
        return self._detach(self._pos[handle])


__all__ = ["Handle", "IndexedMinHeap"]
