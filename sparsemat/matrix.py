import io
import sys
import logging
import numbers
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, TextIO, Tuple

import numpy as np

from .entries import Entry, EntryList

logger = logging.getLogger(__name__)

# Element types with a native numpy counterpart. Anything else goes dense as `object`.
NUMPY_NATIVE = (bool, int, float, complex)


class SparseMatrix(object):
    """ Row-major sparse matrix.
    Stores only non-zero entries, in an `EntryList` ordered by `position`.
    Element type is set by `dtype`, whose no-argument call produces the zero value. """

    def __init__(self, rows: int = 0, cols: int = 0, dtype: Callable[[], Any] = float):
        if rows < 0 or cols < 0:
            raise InvalidResize(f"Invalid matrix extents ({rows}, {cols})")
        self.rows = rows
        self.cols = cols
        self.dtype = dtype
        self.zero = dtype()
        self.store = EntryList(key=self.key)

    def __repr__(self):
        return f"<{self.__class__.__name__}(rows={self.rows}, cols={self.cols}, nnz={len(self.store)})>"

    def __str__(self):
        return self.render_str()

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix): return NotImplemented
        if self.rows != other.rows: return False
        if self.cols != other.cols: return False
        if len(self.store) != len(other.store): return False
        for se, oe in zip(self.store, other.store):
            if se != oe: return False
        return True

    def __matmul__(self, other):
        return self.multiply(other)

    def position(self, row: int, col: int) -> int:
        """ Row-major linear position, against our *current* column count """
        return self.cols * row + col

    def key(self, e: Entry) -> int:
        return self.position(e.row, e.col)

    def in_bounds(self, row: int, col: int) -> bool:
        if not isinstance(row, numbers.Integral) or not isinstance(col, numbers.Integral):
            return False
        return 0 <= row < self.rows and 0 <= col < self.cols

    def check_bounds(self, row: int, col: int):
        if not self.in_bounds(row, col):
            raise OutOfBounds(f"Element ({row}, {col}) out of bounds for {self.rows}x{self.cols} matrix")

    def row_count(self) -> int:
        return self.rows

    def col_count(self) -> int:
        return self.cols

    def non_zero_count(self) -> int:
        return len(self.store)

    def elements(self) -> Iterator[Entry]:
        """ Row-major iterator of stored entries """
        yield from self.store

    def values(self) -> Iterator[Any]:
        """ Row-major iterator of stored values """
        for e in self.store: yield e.val

    def element_at(self, row: int, col: int) -> Any:
        """ Get the value at (row, col). Cells without an entry read as zero. """
        self.check_bounds(row, col)
        e = self.store.find(row, col)
        if e is None:
            return self.zero
        return e.val

    def set_element(self, row: int, col: int, val: Any):
        """ Set the value at (row, col).
        Setting zero removes any existing entry; a non-zero value overwrites
        an existing entry in place, or is inserted at its sorted position. """
        self.check_bounds(row, col)
        if val == self.zero:
            self._remove(row, col)
            return
        n, e = self.store.locate(self.position(row, col))
        if e is not None:
            e.val = val
        else:
            self.store.insert(n, Entry(row, col, val))

    def remove_element(self, row: int, col: int):
        """ Remove any entry at (row, col). Removing an empty cell is a no-op. """
        self.check_bounds(row, col)
        self._remove(row, col)

    def _remove(self, row: int, col: int) -> Optional[Entry]:
        return self.store.remove_if(lambda e: e.row == row and e.col == col)

    def resize(self, rows: int, cols: int):
        """ Grow to `rows` x `cols`. Shrinking either extent is refused outright,
        whether or not any entry would be lost.

        No resort is required: for entries (r1, c1) before (r2, c2) in row-major order,
        either r1 < r2, and then cols*r1 + c1 < cols*(r1+1) <= cols*r2 + c2 for any cols > c1,
        or r1 == r2 and c1 < c2. Growing `cols` keeps every column index under it. """
        if rows < self.rows or cols < self.cols:
            raise InvalidResize(f"Cannot shrink {self.rows}x{self.cols} matrix to {rows}x{cols}")
        logger.debug("Resizing %dx%d matrix to %dx%d", self.rows, self.cols, rows, cols)
        self.rows = rows
        self.cols = cols

    def transpose(self):
        """ Transpose in place, then resort under the new position function. """
        for e in self.store:
            e.transpose()
        self.rows, self.cols = self.cols, self.rows
        self.store.resort()
        logger.debug("Transposed to %dx%d, %d entries", self.rows, self.cols, len(self.store))

    def multiply(self, other: "SparseMatrix") -> "SparseMatrix":
        """ Matrix multiplication self*other.

        Each entry A[i, k] is multiplied against every entry of row `k` of `other`,
        accumulating partial sums keyed by (i, j).
        Neither operand needs transposing, and no zero products are ever formed. """
        if self.cols != other.rows:
            raise DimensionMismatch(
                f"Cannot multiply {self.rows}x{self.cols} matrix by {other.rows}x{other.cols} matrix")

        # Result element type follows the operands' promoted zero, e.g. int*float -> float
        result = SparseMatrix(self.rows, other.cols, dtype=type(self.zero + other.zero))
        if not self.store or not other.store:
            return result

        sums: Dict[Tuple[int, int], Any] = {}
        for a in self.store:
            # Find the start of row `a.col` in `other`, from its head
            bs = iter(other.store)
            b = next(bs, None)
            while b is not None and b.row != a.col:
                b = next(bs, None)
            if b is None:  # Nothing in that row
                continue

            # Partial sums, across the (contiguous) row
            while b is not None and b.row == a.col:
                k = (a.row, b.col)
                sums[k] = sums.get(k, result.zero) + a.val * b.val
                b = next(bs, None)

        for (i, j) in sorted(sums):
            result.set_element(i, j, sums[(i, j)])

        logger.debug("Multiplied %dx%d by %dx%d: %d partial sums, %d non-zero",
                     self.rows, self.cols, other.rows, other.cols, len(sums), len(result.store))
        return result

    def mult(self, rhs: Sequence) -> List[Any]:
        """ Multiply with a column vector """
        if len(rhs) != self.cols:
            raise DimensionMismatch(f'Invalid rhs: length {len(rhs)} for matrix with {self.cols} columns')
        y = [self.zero] * self.rows
        for e in self.store:
            y[e.row] += e.val * rhs[e.col]
        return y

    def render(self, sink: Optional[TextIO] = None):
        """ Write a dense, zero-filled rendering to `sink`, one line per row.
        Walks the (already row-major) store front-to-back alongside the coordinates. """
        if sink is None:
            sink = sys.stdout
        es = iter(self.store)
        e = next(es, None)
        for r in range(self.rows):
            row = []
            for c in range(self.cols):
                if e is not None and e.row == r and e.col == c:
                    row.append(str(e.val))
                    e = next(es, None)
                else:
                    row.append(str(self.zero))
            sink.write(' '.join(row) + '\n')

    def render_str(self) -> str:
        buf = io.StringIO()
        self.render(buf)
        return buf.getvalue()

    def display(self) -> str:
        """ Create a string "X" versus " " display of matrix entries. """
        s = ''
        es = iter(self.store)
        e = next(es, None)
        for r in range(self.rows):
            row = [' '] * self.cols
            while e is not None and e.row == r:
                row[e.col] = 'X'
                e = next(es, None)
            s += ''.join(row) + '\n'
        return s

    def copy(self):
        """ Create an element-by-element copy """
        cp = SparseMatrix(self.rows, self.cols, dtype=self.dtype)
        for e in self.store:
            cp.store.insert_sorted(Entry(e.row, e.col, e.val))
        return cp

    @classmethod
    def identity(cls, n: int, dtype: Callable[[], Any] = float):
        m = cls(n, n, dtype=dtype)
        for k in range(n):
            m.set_element(k, k, dtype(1))
        return m

    @classmethod
    def from_dense(cls, array, dtype: Optional[Callable[[], Any]] = None):
        """ Create from a two-dimensional array-like, e.g. nested lists or a `np.ndarray`.
        Default `dtype` follows the array: int, complex, or float.
        Values are stored as found, never converted to `dtype`. """
        a = np.asarray(array)
        if a.ndim != 2:
            raise DimensionMismatch(f"Expected a two-dimensional array, got {a.ndim} dimensions")
        if dtype is None:
            if np.issubdtype(a.dtype, np.integer):
                dtype = int
            elif np.issubdtype(a.dtype, np.complexfloating):
                dtype = complex
            else:
                dtype = float
        m = cls(*a.shape, dtype=dtype)
        for (r, c), v in np.ndenumerate(a):
            if isinstance(v, np.generic):
                v = v.item()
            m.set_element(r, c, v)
        return m

    def to_dense(self) -> np.ndarray:
        """ Expand into a dense `np.ndarray`.
        Falls back to an `object` array if `dtype` has no numpy counterpart,
        or if any stored value is not a `dtype`. """
        np_dtype = object
        if self.dtype in NUMPY_NATIVE and all(isinstance(v, self.dtype) for v in self.values()):
            np_dtype = self.dtype
        d = np.full((self.rows, self.cols), self.zero, dtype=np_dtype)
        for e in self.store:
            d[e.row, e.col] = e.val
        return d

    def _checkup(self):
        """ Internal consistency tests. Linear in the entry count. """
        MatrixError.assert_true(self.store.is_sorted())
        seen = set()
        for e in self.store:
            MatrixError.assert_true(self.in_bounds(e.row, e.col))
            MatrixError.assert_not_eq(e.val, self.zero)
            MatrixError.assert_true((e.row, e.col) not in seen)
            seen.add((e.row, e.col))


class MatrixError(Exception):
    @classmethod
    def assert_true(cls, cond):
        if not cond:
            raise cls

    @classmethod
    def assert_not_eq(cls, x, y):
        if x == y:
            raise cls


class OutOfBounds(MatrixError, IndexError): pass


class InvalidResize(MatrixError, ValueError): pass


class DimensionMismatch(MatrixError, ValueError): pass
