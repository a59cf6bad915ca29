"""Three-component vector algebra shared by points and colors.

The algebra is written once on the ``Vec3`` base class and realized by two
concrete kinds:

- ``Point``: a position or direction in 3-space (components ``x``, ``y``, ``z``)
- ``Color``: an RGB intensity (components ``r``, ``g``, ``b``)

Both kinds support the same operations, but they never mix: adding a Point to
a Color raises ``TypeError``. Use ``Color.from_point`` / ``Point.from_color``
when a value genuinely has to change kind (e.g. visualizing a normal).

Components are stored in a float64 NumPy array so that degenerate inputs
follow IEEE semantics: normalizing a zero-length vector yields NaN components
instead of raising ``ZeroDivisionError``.

Example:
    >>> from src.raycaster.core.vec3 import Point, dot
    >>> p = Point(3.0, 4.0, 0.0)
    >>> p.length()
    5.0
    >>> dot(p, p) == p.squared_length()
    True
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Iterator, TypeVar

import numpy as np
import numpy.typing as npt

V = TypeVar("V", bound="Vec3")

# int64 bounds as floats; 2**63 itself does not fit back into an int64
_I64_MAX_AS_FLOAT = float(np.nextafter(2.0**63, 0.0))
_I64_MIN_AS_FLOAT = -(2.0**63)


def truncate_components(values: npt.ArrayLike) -> npt.NDArray[np.int64]:
    """Truncate float components toward zero with a saturating cast.

    Finite values are truncated without clamping to any color range. NaN maps
    to 0 and infinities saturate to the int64 bounds.

    Args:
        values: Array-like of floats.

    Returns:
        An int64 array of the same shape.
    """
    arr = np.asarray(values, dtype=np.float64)
    arr = np.nan_to_num(arr, nan=0.0, posinf=_I64_MAX_AS_FLOAT, neginf=_I64_MIN_AS_FLOAT)
    arr = np.clip(arr, _I64_MIN_AS_FLOAT, _I64_MAX_AS_FLOAT)
    return np.trunc(arr).astype(np.int64)


class Vec3:
    """Base three-component value. Instantiate ``Point`` or ``Color`` instead.

    Attributes:
        e0, e1, e2: The three components, readable and writable.
    """

    __slots__ = ("_e",)

    # NumPy scalars on the left defer to our reflected operators instead of
    # treating the value as a 3-element sequence
    __array_ufunc__ = None

    def __init__(self, e0: float, e1: float, e2: float) -> None:
        self._e = np.array((e0, e1, e2), dtype=np.float64)

    @classmethod
    def _from_array(cls: type[V], arr: npt.NDArray[np.float64]) -> V:
        obj = cls.__new__(cls)
        obj._e = arr
        return obj

    # -------------------------------------------------------------------------
    # Component access
    # -------------------------------------------------------------------------

    @property
    def e0(self) -> float:
        return float(self._e[0])

    @e0.setter
    def e0(self, value: float) -> None:
        self._e[0] = value

    @property
    def e1(self) -> float:
        return float(self._e[1])

    @e1.setter
    def e1(self, value: float) -> None:
        self._e[1] = value

    @property
    def e2(self) -> float:
        return float(self._e[2])

    @e2.setter
    def e2(self, value: float) -> None:
        self._e[2] = value

    def __getitem__(self, index: int) -> float:
        if not 0 <= index < 3:
            raise IndexError(f"{type(self).__name__} index out of range: {index}")
        return float(self._e[index])

    def __setitem__(self, index: int, value: float) -> None:
        if not 0 <= index < 3:
            raise IndexError(f"{type(self).__name__} index out of range: {index}")
        self._e[index] = value

    def __len__(self) -> int:
        return 3

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_tuple())

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple of floats."""
        return (float(self._e[0]), float(self._e[1]), float(self._e[2]))

    def to_numpy(self) -> npt.NDArray[np.float64]:
        """Return a copy of the components as a float64 array."""
        return self._e.copy()

    def copy(self: V) -> V:
        return self._from_array(self._e.copy())

    # -------------------------------------------------------------------------
    # Magnitude
    # -------------------------------------------------------------------------

    def length(self) -> float:
        """Euclidean length: sqrt(e0^2 + e1^2 + e2^2)."""
        return math.sqrt(self.squared_length())

    def squared_length(self) -> float:
        """Squared length. Use when only relative magnitude matters."""
        e = self._e
        return float(e[0] * e[0] + e[1] * e[1] + e[2] * e[2])

    def _inverse_length(self) -> np.float64:
        # NumPy division so a zero length gives inf rather than raising
        with np.errstate(divide="ignore"):
            return np.float64(1.0) / np.sqrt(np.float64(self.squared_length()))

    def normalize(self) -> None:
        """Scale this vector in place to unit length.

        A zero-length vector is not guarded against: its components become NaN.
        """
        k = self._inverse_length()
        with np.errstate(invalid="ignore"):
            self._e *= k

    def normalized(self: V) -> V:
        """Return a new unit-length vector pointing the same way.

        Same degenerate behavior as ``normalize``.
        """
        k = self._inverse_length()
        with np.errstate(invalid="ignore"):
            return self._from_array(self._e * k)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _operand(self, other: object) -> npt.NDArray[np.float64] | np.float64 | None:
        """Resolve the other operand of a binary op, or None if unsupported.

        Only a value of exactly the same kind, or a bare real number, is
        accepted. Booleans are not treated as numbers.
        """
        if type(other) is type(self):
            return other._e  # type: ignore[attr-defined]
        if isinstance(other, Real) and not isinstance(other, bool):
            return np.float64(other)
        return None

    def __add__(self: V, other: object) -> V:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        return self._from_array(self._e + rhs)

    def __radd__(self: V, other: object) -> V:
        return self.__add__(other)

    def __sub__(self: V, other: object) -> V:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        return self._from_array(self._e - rhs)

    def __rsub__(self: V, other: object) -> V:
        lhs = self._operand(other)
        if lhs is None:
            return NotImplemented
        return self._from_array(lhs - self._e)

    def __mul__(self: V, other: object) -> V:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        return self._from_array(self._e * rhs)

    def __rmul__(self: V, other: object) -> V:
        return self.__mul__(other)

    def __truediv__(self: V, other: object) -> V:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._from_array(self._e / rhs)

    def __rtruediv__(self: V, other: object) -> V:
        lhs = self._operand(other)
        if lhs is None:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            return self._from_array(lhs / self._e)

    def __iadd__(self: V, other: object) -> V:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        self._e += rhs
        return self

    def __isub__(self: V, other: object) -> V:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        self._e -= rhs
        return self

    def __imul__(self: V, other: object) -> V:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        self._e *= rhs
        return self

    def __itruediv__(self: V, other: object) -> V:
        rhs = self._operand(other)
        if rhs is None:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            self._e /= rhs
        return self

    def __neg__(self: V) -> V:
        return self._from_array(-self._e)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._e, other._e))  # type: ignore[attr-defined]

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    def isclose(self: V, other: V, abs_tol: float = 1e-9) -> bool:
        """Component-wise closeness check against a value of the same kind."""
        _check_same_kind(self, other)
        return bool(np.allclose(self._e, other._e, rtol=0.0, atol=abs_tol))

    # -------------------------------------------------------------------------
    # Text rendering
    # -------------------------------------------------------------------------

    def to_ppm_tuple(self) -> str:
        """Render the raw float components as ``"e0 e1 e2"``.

        Uses Python float formatting, so whole numbers keep their decimal
        point (``1.0``, not ``1``).
        """
        return f"{self.e0} {self.e1} {self.e2}"

    def to_ppm_tuple_int(self) -> str:
        """Render the components truncated to integers as ``"e0 e1 e2"``.

        Truncation is toward zero and nothing is clamped, so values outside
        [0, 255] are written as they are.
        """
        ints = truncate_components(self._e)
        return f"{ints[0]} {ints[1]} {ints[2]}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.e0!r}, {self.e1!r}, {self.e2!r})"


class Point(Vec3):
    """A position or direction in 3-space."""

    __slots__ = ()

    x = Vec3.e0
    y = Vec3.e1
    z = Vec3.e2

    @classmethod
    def from_color(cls, color: Color) -> Point:
        """Reinterpret a color's (r, g, b) as (x, y, z)."""
        if not isinstance(color, Color):
            raise TypeError(f"Expected Color, got {type(color).__name__}")
        return cls._from_array(color.to_numpy())


class Color(Vec3):
    """An RGB intensity. Nominally in [0, 1] but never clamped."""

    __slots__ = ()

    r = Vec3.e0
    g = Vec3.e1
    b = Vec3.e2

    @classmethod
    def from_point(cls, point: Point) -> Color:
        """Reinterpret a point's (x, y, z) as (r, g, b)."""
        if not isinstance(point, Point):
            raise TypeError(f"Expected Point, got {type(point).__name__}")
        return cls._from_array(point.to_numpy())


# =============================================================================
# Free functions
# =============================================================================


def _check_same_kind(a: Vec3, b: Vec3) -> None:
    if type(a) is not type(b):
        raise TypeError(
            f"Operands must be the same kind: {type(a).__name__} vs {type(b).__name__}"
        )


def dot(a: V, b: V) -> float:
    """Dot product of two values of the same kind."""
    _check_same_kind(a, b)
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: V, b: V) -> V:
    """Right-handed cross product a x b, returned as a new value."""
    _check_same_kind(a, b)
    return type(a)(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def unit_vector(v: V) -> V:
    """Functional form of ``v.normalized()``."""
    return v.normalized()
