"""Dense row-major matrix used throughout the numeric core."""

from __future__ import annotations

import operator
from typing import Callable, Iterable, List, Sequence

import numpy as np

from .errors import Shape, ShapeError, ShapeMismatch

Array = np.ndarray

_MAX_ELEMENTS = np.iinfo(np.intp).max


class Matrix:
    """A ``rows x cols`` block of float64 values.

    Binary operations always allocate a new matrix and leave both operands
    untouched.  Element assignment through ``m[r, c] = v`` is the only
    in-place mutation.  Index bounds are the caller's responsibility.
    """

    __slots__ = ("_data",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: int, cols: int, fill: float = 0.0) -> None:
        try:
            rows, cols = operator.index(rows), operator.index(cols)
        except TypeError:
            raise ShapeError(f"Matrix shape must be integers, got ({rows!r}x{cols!r})") from None
        if rows < 0 or cols < 0:
            raise ShapeError(f"Matrix shape must be non-negative, got ({rows}x{cols})")
        if cols and rows > _MAX_ELEMENTS // cols:
            raise ShapeError(f"Matrix shape ({rows}x{cols}) cannot be represented")
        self._data = np.full((rows, cols), float(fill), dtype=np.float64)

    # ------------------------------------------------------------------
    # Construction helpers

    @classmethod
    def from_array(cls, values: Array) -> "Matrix":
        array = np.asarray(values, dtype=np.float64)
        if array.ndim != 2:
            raise ShapeError(f"Matrix requires a 2-D array, got {array.ndim}-D")
        out = cls.__new__(cls)
        out._data = np.array(array, dtype=np.float64, order="C")
        return out

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "Matrix":
        rows = [list(row) for row in rows]
        if not rows:
            return cls(0, 0)
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ShapeError("Matrix rows must all have the same length")
        if width == 0:
            return cls(len(rows), 0)
        return cls.from_array(np.array(rows, dtype=np.float64))

    @classmethod
    def column(cls, values: Iterable[float]) -> "Matrix":
        """Build an ``n x 1`` column vector."""

        flat = np.asarray(list(values), dtype=np.float64)
        return cls.from_array(flat.reshape(-1, 1))

    # ------------------------------------------------------------------
    # Shape and element access

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> Shape:
        return self.rows, self.cols

    def __getitem__(self, index: tuple[int, int]) -> float:
        r, c = index
        return float(self._data[r, c])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        r, c = index
        self._data[r, c] = value

    def to_numpy(self) -> Array:
        """Return a copy of the backing values."""

        return self._data.copy()

    def to_list(self) -> List[List[float]]:
        return self._data.tolist()

    # ------------------------------------------------------------------
    # Arithmetic

    def matmul(self, other: "Matrix") -> "Matrix":
        if self.cols != other.rows:
            raise ShapeMismatch("Matrix multiply", self.shape, other.shape, "*")
        return Matrix.from_array(self._data @ other._data)

    def add(self, other: "Matrix") -> "Matrix":
        self._require_same_shape("Matrix add", other, "+")
        return Matrix.from_array(self._data + other._data)

    def subtract(self, other: "Matrix") -> "Matrix":
        self._require_same_shape("Matrix subtract", other, "-")
        return Matrix.from_array(self._data - other._data)

    def scale(self, k: float) -> "Matrix":
        return Matrix.from_array(self._data * float(k))

    def transpose(self) -> "Matrix":
        return Matrix.from_array(self._data.T)

    def hadamard(self, other: "Matrix") -> "Matrix":
        self._require_same_shape("HadamardProduct", other, "*")
        return Matrix.from_array(self._data * other._data)

    def apply(self, fn: Callable[[float], float]) -> "Matrix":
        """Return a new matrix with ``fn`` applied to every element."""

        if self._data.size == 0:
            return Matrix(self.rows, self.cols)
        mapped = np.vectorize(fn, otypes=[np.float64])(self._data)
        return Matrix.from_array(mapped)

    def sum(self) -> float:
        return float(self._data.sum())

    def max(self) -> float:
        return float(self._data.max())

    def allclose(self, other: "Matrix", atol: float = 1e-8, rtol: float = 1e-5) -> bool:
        if self.shape != other.shape:
            return False
        return bool(np.allclose(self._data, other._data, atol=atol, rtol=rtol))

    __matmul__ = matmul
    __add__ = add
    __sub__ = subtract

    def __mul__(self, k: float) -> "Matrix":
        if isinstance(k, Matrix):
            return NotImplemented
        return self.scale(k)

    __rmul__ = __mul__

    def __neg__(self) -> "Matrix":
        return self.scale(-1.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"Matrix({self.rows}x{self.cols}, {self.to_list()!r})"

    # ------------------------------------------------------------------

    def _require_same_shape(self, operation: str, other: "Matrix", symbol: str) -> None:
        if self.shape != other.shape:
            raise ShapeMismatch(operation, self.shape, other.shape, symbol)


__all__ = ["Array", "Matrix"]
