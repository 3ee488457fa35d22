"""algebra package: rings, fields and the named instances matrices run on."""

from kaliningraph.algebra.rings import (
    Field,
    Ring,
    UndefinedAlgebra,
    is_field,
    require_arithmetic,
    undefined_algebra,
)
from kaliningraph.algebra.instances import (
    BOOLEAN_ALGEBRA,
    DOUBLE_FIELD,
    GF2_ALGEBRA,
    INTEGER_FIELD,
    MAXPLUS_ALGEBRA,
    MINPLUS_ALGEBRA,
    XOR_ALGEBRA,
)

__all__ = [
    "Ring",
    "Field",
    "is_field",
    "UndefinedAlgebra",
    "undefined_algebra",
    "require_arithmetic",
    "BOOLEAN_ALGEBRA",
    "XOR_ALGEBRA",
    "INTEGER_FIELD",
    "DOUBLE_FIELD",
    "MINPLUS_ALGEBRA",
    "MAXPLUS_ALGEBRA",
    "GF2_ALGEBRA",
]
