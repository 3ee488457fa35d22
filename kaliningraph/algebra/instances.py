"""Named algebra instances.

Each constant is a process-wide immutable Ring or Field:

    BOOLEAN_ALGEBRA   ({F,T}, or, and)         reachability
    XOR_ALGEBRA       ({F,T}, xor, and)        parity of path counts
    INTEGER_FIELD     (Z, +, *, -, fails)      counting walks
    DOUBLE_FIELD      (R, +, *, -, /)          ordinary linear algebra
    MINPLUS_ALGEBRA   (R ∪ {+inf}, min, +)     shortest paths
    MAXPLUS_ALGEBRA   (R ∪ {-inf}, max, +)     longest/critical paths
    GF2_ALGEBRA       ({0,1}, + mod 2, * mod 2)

Python integers are unbounded, so the tropical identities are IEEE
infinities rather than machine-integer extremes: inf + w == inf keeps the
"no edge" value absorbing under times without overflow.
"""

import math
import operator

from kaliningraph.algebra.rings import Field, Ring
from kaliningraph.exceptions import UnsupportedOperation


def _integer_div(a: int, b: int) -> int:
    raise UnsupportedOperation("Division is undefined over the integers")


# https://www.ijcai.org/Proceedings/2020/0685.pdf
BOOLEAN_ALGEBRA: Ring[bool] = Ring(
    nil=False,
    one=True,
    plus=lambda a, b: a or b,
    times=lambda a, b: a and b,
)

XOR_ALGEBRA: Ring[bool] = Ring(
    nil=False,
    one=True,
    plus=lambda a, b: a != b,
    times=lambda a, b: a and b,
)

INTEGER_FIELD: Field[int] = Field(
    nil=0,
    one=1,
    plus=operator.add,
    times=operator.mul,
    minus=operator.sub,
    div=_integer_div,
)

DOUBLE_FIELD: Field[float] = Field(
    nil=0.0,
    one=1.0,
    plus=operator.add,
    times=operator.mul,
    minus=operator.sub,
    div=operator.truediv,
)

MINPLUS_ALGEBRA: Ring[float] = Ring(
    nil=math.inf,
    one=0,
    plus=min,
    times=operator.add,
)

MAXPLUS_ALGEBRA: Ring[float] = Ring(
    nil=-math.inf,
    one=0,
    plus=max,
    times=operator.add,
)

GF2_ALGEBRA: Ring[int] = Ring(
    nil=0,
    one=1,
    plus=lambda a, b: (a + b) % 2,
    times=lambda a, b: (a * b) % 2,
)
