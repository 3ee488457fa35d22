"""Generic matrix over a pluggable algebra.

A Matrix stores its elements in row-major order and delegates every
arithmetic decision to its algebra (see kaliningraph.algebra). The same code
therefore computes:

    - reachability           (Boolean OR/AND semiring)
    - shortest path lengths  (min-plus tropical semiring)
    - walk parities          (GF(2))
    - ordinary products      (real field)

Storage:
    M[r, c] = data[r * num_cols + c]

Every operation returns a new matrix; nothing mutates in place. Derived
views (rows, cols, transpose, idxs) are memoized per instance with
functools.cached_property. The value is fully computed before it is stored,
so a concurrent reader sees either no cache or a complete one; two racing
readers may both compute the view, which is harmless because it is a pure
function of the data.

Flavors:
    Matrix        generic, algebra supplied by the caller
    FreeMatrix    no algebra: a labelled rectangular container
    BooleanMatrix see kaliningraph.tensor.boolean
    DoubleMatrix  see kaliningraph.tensor.double
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import cached_property, reduce
from math import isqrt
from numbers import Integral
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)
import numpy as np

from kaliningraph.algebra.rings import Ring, is_field, require_arithmetic, undefined_algebra
from kaliningraph.exceptions import (
    DimensionError,
    FixpointNotReached,
    IndexOutOfBounds,
    UnsupportedOperation,
    format_shapes,
)
from kaliningraph.utils import all_pairs

T = TypeVar("T")
Y = TypeVar("Y")
K = TypeVar("K")

Index = Tuple[int, int]


class SparseTensor(ABC, Generic[K]):
    """Minimal sparse-tensor interface: a multiset of keys.

    Only the non-default entries are stored; a missing key has multiplicity 0.
    """

    @property
    @abstractmethod
    def entries(self) -> Dict[K, int]:
        """Mapping from key to multiplicity."""

    def multiplicity(self, key: K) -> int:
        return self.entries.get(key, 0)

    def count(self, selector: Callable[[K], bool]) -> int:
        """Total multiplicity of the keys accepted by selector."""
        return sum(n for key, n in self.entries.items() if selector(key))


def dot(algebra: Ring[T], xs: Sequence[T], ys: Sequence[T]) -> T:
    """Inner product under an algebra: plus-reduction of pairwise times.

    The reduction starts from the first product, not from nil, so both
    operands must be non-empty and of equal length.

    Raises:
        DimensionError: If lengths differ or the operands are empty
    """
    if len(xs) != len(ys):
        raise DimensionError(f"Cannot take dot product of lengths {len(xs)} and {len(ys)}")
    if not xs:
        raise DimensionError("Dot product of empty vectors is undefined")
    return reduce(algebra.plus, map(algebra.times, xs, ys))


def vector_dot(vector: Sequence[T], matrix: "Matrix[T]") -> Tuple[T, ...]:
    """Row vector times matrix, each column folded from the algebra's nil."""
    if len(vector) != matrix.num_rows:
        raise DimensionError(
            f"Dimension mismatch: 1,{len(vector)} . {matrix.num_rows},{matrix.num_cols}"
        )
    alg = matrix.algebra
    return tuple(
        reduce(alg.plus, map(alg.times, vector, col), alg.nil) for col in matrix.cols
    )


@dataclass(frozen=True, eq=False, repr=False)
class Matrix(SparseTensor[Tuple[int, int, Any]], Generic[T]):
    """Rectangular matrix of elements of type T over an algebra.

    Attributes:
        num_rows: Number of rows (> 0)
        num_cols: Number of columns (> 0)
        data: Row-major elements, exactly num_rows * num_cols of them
        algebra: Ring or Field defining plus/times; when omitted the flavor's
            default is used (a failing placeholder for Matrix and FreeMatrix)

    Equality is structural: same flavor, same shape, same data. The algebra
    does not take part in equality or hashing.
    """

    num_rows: int
    num_cols: int
    data: Sequence[T]
    algebra: Optional[Ring[T]] = None

    # Overridden by flavors; not dataclass fields.
    _default_algebra = None
    _element_type = None

    def __post_init__(self):
        if self.num_rows <= 0 or self.num_cols <= 0:
            raise DimensionError(
                f"Matrix dimensions must be positive, got {self.num_rows},{self.num_cols}"
            )

        convert = type(self)._element_type
        data = tuple(self.data) if convert is None else tuple(map(convert, self.data))
        if len(data) != self.num_rows * self.num_cols:
            raise DimensionError(
                f"Expected {self.num_rows}*{self.num_cols}={self.num_rows * self.num_cols} "
                f"elements, got {len(data)}"
            )
        object.__setattr__(self, "data", data)

        if self.algebra is None:
            default = type(self)._default_algebra
            object.__setattr__(
                self, "algebra", default if default is not None else undefined_algebra(data[0])
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_function(
        cls,
        f: Callable[[int, int], T],
        num_rows: int,
        num_cols: Optional[int] = None,
        algebra: Optional[Ring[T]] = None,
    ) -> "Matrix[T]":
        """Build a matrix by calling f(row, col) for every cell in row-major order."""
        num_cols = num_rows if num_cols is None else num_cols
        data = [f(r, c) for r, c in all_pairs(num_rows, num_cols)]
        return cls(num_rows, num_cols, data, algebra)

    @classmethod
    def from_elements(
        cls, elements: Iterable[T], algebra: Optional[Ring[T]] = None
    ) -> "Matrix[T]":
        """Build a square matrix from a flat sequence.

        Raises:
            DimensionError: If the length is not a positive perfect square
        """
        data = list(elements)
        side = isqrt(len(data))
        if side == 0 or side * side != len(data):
            raise DimensionError(f"Cannot infer a square matrix from {len(data)} elements")
        return cls(side, side, data, algebra)

    @classmethod
    def from_rows(
        cls, rows: Iterable[Iterable[T]], algebra: Optional[Ring[T]] = None
    ) -> "Matrix[T]":
        """Build a matrix from nested rows (lists, tuples or a 2-D numpy array).

        Raises:
            DimensionError: If rows are ragged, empty, or the array is not 2-D
        """
        if isinstance(rows, np.ndarray):
            if rows.ndim != 2:
                raise DimensionError(f"Expected a 2-D array, got shape {rows.shape}")
            rows = rows.tolist()

        rows = [list(row) for row in rows]
        if not rows or not rows[0]:
            raise DimensionError("Cannot build a matrix from empty rows")

        num_cols = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != num_cols:
                raise DimensionError(
                    f"Row {i} has {len(row)} elements, expected {num_cols}"
                )

        return cls(len(rows), num_cols, [e for row in rows for e in row], algebra)

    @classmethod
    def _resolve_algebra(cls, algebra: Optional[Ring[T]]) -> Ring[T]:
        if algebra is not None:
            return algebra
        if cls._default_algebra is None:
            raise UnsupportedOperation(f"{cls.__name__} has no default algebra; pass one")
        return cls._default_algebra

    @classmethod
    def zeros(
        cls, num_rows: int, num_cols: Optional[int] = None, algebra: Optional[Ring[T]] = None
    ) -> "Matrix[T]":
        """Matrix filled with the algebra's nil."""
        alg = cls._resolve_algebra(algebra)
        return cls.from_function(lambda r, c: alg.nil, num_rows, num_cols, alg)

    @classmethod
    def ones(
        cls, num_rows: int, num_cols: Optional[int] = None, algebra: Optional[Ring[T]] = None
    ) -> "Matrix[T]":
        """Matrix filled with the algebra's one."""
        alg = cls._resolve_algebra(algebra)
        return cls.from_function(lambda r, c: alg.one, num_rows, num_cols, alg)

    @classmethod
    def identity(cls, size: int, algebra: Optional[Ring[T]] = None) -> "Matrix[T]":
        """one on the diagonal, nil elsewhere."""
        alg = cls._resolve_algebra(algebra)
        return cls.from_function(lambda r, c: alg.one if r == c else alg.nil, size, size, alg)

    def _new(
        self,
        num_rows: int,
        num_cols: int,
        data: Iterable[T],
        algebra: Optional[Ring[T]] = None,
    ) -> "Matrix[T]":
        """Rebuild as the same flavor, keeping the algebra unless one is given."""
        alg = self.algebra if algebra is None else algebra
        return type(self)(num_rows, num_cols, list(data), alg)

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    @property
    def shape(self) -> Index:
        return self.num_rows, self.num_cols

    def _check_index(self, row: int, col: Optional[int] = None) -> None:
        for i in (row, col):
            if i is not None and not isinstance(i, Integral):
                raise IndexOutOfBounds(f"Indices must be ints, got {i!r}")
        if not 0 <= row < self.num_rows:
            raise IndexOutOfBounds(
                f"Row {row} out of range for {self.num_rows}x{self.num_cols} matrix"
            )
        if col is not None and not 0 <= col < self.num_cols:
            raise IndexOutOfBounds(
                f"Column {col} out of range for {self.num_rows}x{self.num_cols} matrix"
            )

    def get(self, row: int, col: Optional[int] = None):
        """Element at (row, col), or the whole row when col is omitted.

        Negative indices are rejected rather than wrapped around.
        """
        self._check_index(row, col)
        if col is None:
            return self.rows[row]
        return self.data[row * self.num_cols + col]

    def __getitem__(self, key):
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexOutOfBounds(f"Expected (row, col), got {key!r}")
            return self.get(*key)
        return self.get(key)

    def __iter__(self) -> Iterator[Tuple[T, ...]]:
        return iter(self.rows)

    def get_elements(self, filter_by: Callable[[int, int], bool]) -> List[T]:
        """Elements whose (row, col) satisfies filter_by, in row-major order."""
        return [e for (r, c), e in zip(self.idxs, self.data) if filter_by(r, c)]

    # ------------------------------------------------------------------
    # Cached views
    # ------------------------------------------------------------------

    @cached_property
    def rows(self) -> Tuple[Tuple[T, ...], ...]:
        n = self.num_cols
        return tuple(self.data[i : i + n] for i in range(0, len(self.data), n))

    @cached_property
    def cols(self) -> Tuple[Tuple[T, ...], ...]:
        return tuple(zip(*self.rows))

    @cached_property
    def transpose(self) -> "Matrix[T]":
        return self._new(self.num_cols, self.num_rows, [e for col in self.cols for e in col])

    @cached_property
    def idxs(self) -> Tuple[Index, ...]:
        return tuple(all_pairs(self.num_rows, self.num_cols))

    @cached_property
    def values(self) -> frozenset:
        """Distinct elements."""
        return frozenset(self.data)

    @cached_property
    def entries(self) -> Dict[Tuple[int, int, Any], int]:
        # Only elements that differ from nil are stored.
        nil = self.algebra.nil
        return {(r, c, e): 1 for (r, c), e in zip(self.idxs, self.data) if e != nil}

    # ------------------------------------------------------------------
    # Algebra-driven operations
    # ------------------------------------------------------------------

    def join(
        self,
        other: "Matrix",
        op: Callable[[Ring[T], int, int], T],
        ids: Optional[Iterable[Index]] = None,
    ) -> "Matrix[T]":
        """General binary combinator underlying +, - and *.

        The result has shape (self.num_rows, other.num_cols). op(algebra, i, j)
        computes the entry at each listed index pair; ids defaults to every
        pair. Pairs not listed are filled with the algebra's nil.

        Shape preconditions are the caller's responsibility.

        Raises:
            IndexOutOfBounds: If ids contains a pair outside the result shape
        """
        num_rows, num_cols = self.num_rows, other.num_cols
        alg = self.algebra

        if ids is None:
            data = [op(alg, i, j) for i, j in all_pairs(num_rows, num_cols)]
        else:
            cells = {}
            for i, j in ids:
                if not (0 <= i < num_rows and 0 <= j < num_cols):
                    raise IndexOutOfBounds(
                        f"Index ({i}, {j}) outside {num_rows}x{num_cols} result"
                    )
                cells[i * num_cols + j] = op(alg, i, j)
            data = [cells.get(k, alg.nil) for k in range(num_rows * num_cols)]

        return self._new(num_rows, num_cols, data)

    def _promote(self, other: "Matrix") -> Tuple["Matrix", "Matrix"]:
        """Bring both operands to a common flavor (overridden for widening)."""
        return self, other

    def _require_same_shape(self, other: "Matrix") -> None:
        if self.shape != other.shape:
            raise DimensionError(
                f"Dimension mismatch: {format_shapes(self.shape, other.shape)}"
            )

    def _add(self, other: "Matrix") -> "Matrix[T]":
        self._require_same_shape(other)
        a, b, n = self.data, other.data, self.num_cols
        return self.join(other, lambda alg, i, j: alg.plus(a[i * n + j], b[i * n + j]))

    def _sub(self, other: "Matrix") -> "Matrix[T]":
        self._require_same_shape(other)
        if not is_field(self.algebra):
            raise UnsupportedOperation("Subtraction requires a field")
        a, b, n = self.data, other.data, self.num_cols
        return self.join(other, lambda alg, i, j: alg.minus(a[i * n + j], b[i * n + j]))

    def _matmul(self, other: "Matrix") -> "Matrix[T]":
        if self.num_cols != other.num_rows:
            raise DimensionError(
                f"Dimension mismatch: {format_shapes(self.shape, other.shape)}"
            )
        rows, cols = self.rows, other.cols
        return self.join(other, lambda alg, i, j: dot(alg, rows[i], cols[j]))

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        left, right = self._promote(other)
        return left._add(right)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        left, right = self._promote(other)
        return left._sub(right)

    def __mul__(self, other):
        """Matrix product for a matrix operand, scalar product otherwise."""
        if isinstance(other, Matrix):
            left, right = self._promote(other)
            return left._matmul(right)
        times = self.algebra.times
        return self.elwise(lambda e: times(e, other))

    def __rmul__(self, scalar):
        times = self.algebra.times
        return self.elwise(lambda e: times(scalar, e))

    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        left, right = self._promote(other)
        return left._matmul(right)

    def __pow__(self, exponent: int) -> "Matrix[T]":
        """Repeated multiplication; exponent 0 gives the identity."""
        if self.num_rows != self.num_cols:
            raise DimensionError(
                f"Only square matrices have powers: {format_shapes(self.shape, self.shape)}"
            )
        if exponent < 0:
            raise ValueError(f"Exponent must be non-negative, got {exponent}")
        require_arithmetic(self.algebra)
        if exponent == 0:
            return type(self).identity(self.num_rows, self.algebra)

        result: Optional[Matrix[T]] = None
        base: Matrix[T] = self
        # Square-and-multiply; relies on associativity of the algebra.
        while exponent:
            if exponent & 1:
                result = base if result is None else result._matmul(base)
            exponent >>= 1
            if exponent:
                base = base._matmul(base)
        return result

    def map(self, f: Callable[[T], Y], algebra: Optional[Ring[Y]] = None) -> "Matrix[Y]":
        """Apply f to every element.

        The mapped element type may differ, so the result does not inherit
        this matrix's algebra: it is a Matrix over the supplied algebra, or a
        FreeMatrix when none is given.
        """
        data = [f(e) for e in self.data]
        if algebra is None:
            return FreeMatrix(self.num_rows, self.num_cols, data)
        return Matrix(self.num_rows, self.num_cols, data, algebra)

    def elwise(self, f: Callable[[T], T]) -> "Matrix[T]":
        """Apply f to every element, keeping flavor and algebra."""
        return self._new(self.num_rows, self.num_cols, map(f, self.data))

    def seek_fixpoint(
        self,
        op: Callable[["Matrix[T]"], "Matrix[T]"],
        max_iterations: Optional[int] = None,
    ) -> "Matrix[T]":
        """Apply op repeatedly until two consecutive iterates are equal.

        Without max_iterations this does not terminate unless op converges
        from this starting point (e.g. monotone ops over a finite semiring).

        Raises:
            FixpointNotReached: If max_iterations applications did not converge
        """
        current = self
        iterations = 0
        while True:
            following = op(current)
            iterations += 1
            if following == current:
                return following
            if max_iterations is not None and iterations >= max_iterations:
                raise FixpointNotReached(
                    f"No fixpoint after {iterations} iterations"
                )
            current = following

    # ------------------------------------------------------------------
    # Equality, rendering, interop
    # ------------------------------------------------------------------

    def __eq__(self, other):
        if self is other:
            return True
        if type(self) is not type(other):
            return NotImplemented
        return self.shape == other.shape and self.data == other.data

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.num_rows, self.num_cols, self.data))

    def __str__(self) -> str:
        pad = max(len(str(e)) for e in self.data) + 2
        return "\n".join(
            " ".join(str(e).ljust(pad) for e in row).rstrip() for row in self.rows
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.num_rows}x{self.num_cols}, data={list(self.data)!r})"

    def to_numpy(self, dtype: Any = None) -> np.ndarray:
        """Fresh (num_rows, num_cols) numpy array of the elements."""
        return np.array(self.rows, dtype=dtype)


@dataclass(frozen=True, eq=False, repr=False)
class FreeMatrix(Matrix[T]):
    """Matrix with no algebra: a rectangular container.

    Construction always succeeds. Arithmetic fails with UnsupportedOperation
    when first attempted, unless an algebra is passed explicitly.

    Example:
        >>> labels = FreeMatrix.from_function(lambda r, c: f"v{r}{c}", 2)
        >>> labels[1, 0]
        'v10'
    """

    def __str__(self) -> str:
        widths = [max(len(str(e)) for e in col) for col in self.cols]
        return "\n".join(
            " ".join(str(e).ljust(w) for e, w in zip(row, widths)).rstrip()
            for row in self.rows
        )
