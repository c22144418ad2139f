"""
Ordered storage for the non-zero entries of a sparse matrix
"""

from typing import Any, Callable, Iterator, List, Optional, Tuple


class Entry(object):
    """ A single non-zero (row, col, val) triple """

    __slots__ = ("row", "col", "val")

    def __init__(self, row: int, col: int, val: Any):
        self.row = row
        self.col = col
        self.val = val

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return self.row == other.row and self.col == other.col and self.val == other.val

    def __repr__(self):
        return f"<{self.__class__.__name__}(row={self.row}, col={self.col}, val={self.val!r})>"

    def transpose(self):
        self.row, self.col = self.col, self.row


class EntryList(object):
    """ Sequence of `Entry`s kept in order of `key(entry)`.
    The list itself never checks coordinates against any matrix extents;
    callers own that, and own calling `resort` whenever `key` changes meaning. """

    def __init__(self, key: Callable[[Entry], int]):
        self.key = key
        self.entries: List[Entry] = []

    def __len__(self):
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __bool__(self):
        return bool(self.entries)

    def __repr__(self):
        return f"<{self.__class__.__name__}({self.entries!r})>"

    def locate(self, k: int) -> Tuple[int, Optional[Entry]]:
        """ Walk from the front, looking for key `k`.
        Returns (index, entry) if an entry with key `k` is present,
        otherwise (index, None) where `index` is where such an entry belongs. """
        for n, e in enumerate(self.entries):
            ek = self.key(e)
            if ek == k:
                return n, e
            if ek > k:
                return n, None
        return len(self.entries), None

    def insert(self, n: int, entry: Entry) -> Entry:
        """ Insert `entry` at index `n`, as found by `locate` """
        self.entries.insert(n, entry)
        return entry

    def insert_sorted(self, entry: Entry) -> Entry:
        """ Insert `entry` before the first entry with a greater key, or append. """
        k = self.key(entry)
        n = 0
        while n < len(self.entries) and self.key(self.entries[n]) <= k:
            n += 1
        self.entries.insert(n, entry)
        return entry

    def find(self, row: int, col: int) -> Optional[Entry]:
        """ Get the entry at (row, col), or None if not present """
        for e in self.entries:
            if e.row == row and e.col == col:
                return e
        return None

    def remove_if(self, pred: Callable[[Entry], bool]) -> Optional[Entry]:
        """ Remove and return the first entry matching `pred`.
        No-op returning None if nothing matches. """
        for n, e in enumerate(self.entries):
            if pred(e):
                return self.entries.pop(n)
        return None

    def resort(self, key: Optional[Callable[[Entry], int]] = None):
        """ Full re-sort, optionally adopting a new `key`.
        Stable: entries with equal keys keep their relative order. """
        if key is not None:
            self.key = key
        self.entries.sort(key=self.key)

    def is_sorted(self) -> bool:
        keys = [self.key(e) for e in self.entries]
        return all(x <= y for x, y in zip(keys, keys[1:]))

    def clear(self):
        self.entries.clear()
