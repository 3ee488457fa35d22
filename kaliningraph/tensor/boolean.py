"""Boolean matrices over the OR/AND semiring.

With plus = or and times = and, (A * B)[i, j] is True iff some k has
A[i, k] and B[k, j]: matrix products compose reachability. A is an adjacency
matrix, A ** k answers "is there a walk of exactly k edges", and the fixpoint
of M -> M + M * M is the transitive closure.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
import numpy as np

from kaliningraph.algebra.instances import BOOLEAN_ALGEBRA
from kaliningraph.exceptions import ConstructionError, DimensionError, IndexOutOfBounds
from kaliningraph.tensor.matrix import Matrix


@dataclass(frozen=True, eq=False, repr=False)
class BooleanMatrix(Matrix[bool]):
    """Matrix of booleans, BOOLEAN_ALGEBRA by default.

    Constructors:
        BooleanMatrix(num_rows, num_cols, data)
        BooleanMatrix.from_function(f, num_rows, num_cols)
        BooleanMatrix.from_elements(flat_square_list)
        BooleanMatrix.from_string("10\\n01")
        BooleanMatrix.from_sparse(num_rows, num_cols, [((r, c), True), ...])
        BooleanMatrix.ones / zeros / identity / random
    """

    _default_algebra = BOOLEAN_ALGEBRA
    _element_type = bool

    @classmethod
    def from_string(cls, text: str) -> "BooleanMatrix":
        """Parse a compact two-symbol picture of a matrix.

        Whitespace is ignored. Of the (at most two) remaining symbols, the
        lexicographically larger one means True, so "10", "#." and "ba" all
        work. A text with a single symbol is all True.

        When the text has several non-blank lines each line is a row;
        otherwise the matrix is inferred to be square.

        Raises:
            ConstructionError: More than two distinct symbols
            DimensionError: Ragged lines, or a single line that is not a square
        """
        symbols = [ch for ch in text if not ch.isspace()]
        distinct = sorted(set(symbols))
        if len(distinct) > 2:
            raise ConstructionError(
                f"Expected at most two distinct symbols, found {len(distinct)}: {''.join(distinct)}"
            )
        if not symbols:
            raise DimensionError("Cannot build a matrix from a blank string")

        hi = distinct[-1]
        lines = [line for line in text.splitlines() if line.strip()]
        if len(lines) > 1:
            return cls.from_rows(
                [[ch == hi for ch in line if not ch.isspace()] for line in lines]
            )
        return cls.from_elements([ch == hi for ch in symbols])

    @classmethod
    def from_sparse(
        cls,
        num_rows: int,
        num_cols: Optional[int],
        values: Iterable[Tuple[Tuple[int, int], bool]],
    ) -> "BooleanMatrix":
        """Build from ((row, col), value) pairs; unspecified cells are False."""
        num_cols = num_rows if num_cols is None else num_cols
        cells = {}
        for (r, c), value in values:
            if not (0 <= r < num_rows and 0 <= c < num_cols):
                raise IndexOutOfBounds(
                    f"Index ({r}, {c}) outside {num_rows}x{num_cols} matrix"
                )
            cells[r, c] = bool(value)
        return cls.from_function(lambda r, c: cells.get((r, c), False), num_rows, num_cols)

    @classmethod
    def random(
        cls, size: int, rng: Optional[np.random.Generator] = None
    ) -> "BooleanMatrix":
        """Square matrix of fair coin flips."""
        rng = rng if rng is not None else np.random.default_rng()
        return cls.from_rows(rng.integers(0, 2, size=(size, size)).astype(bool))

    @property
    def is_full(self) -> bool:
        return all(self.data)

    def to_double_matrix(self):
        """Widen to DoubleMatrix: True -> 1.0, False -> 0.0."""
        from kaliningraph.tensor.double import DoubleMatrix

        return DoubleMatrix(self.num_rows, self.num_cols, [1.0 if e else 0.0 for e in self.data])

    def _promote(self, other: Matrix) -> Tuple[Matrix, Matrix]:
        from kaliningraph.tensor.double import DoubleMatrix

        if isinstance(other, DoubleMatrix):
            return self.to_double_matrix(), other
        return self, other

    def __str__(self) -> str:
        return "\n".join(" ".join("1" if e else "0" for e in row) for row in self.rows)
