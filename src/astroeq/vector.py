"""
astroeq.vector — Dual-Representation 3-Vectors
===============================================

A single :class:`Vector` type that carries an explicit representation tag
and a three-component payload.

Representations
---------------

**Rectangular** ``(x, y, z)`` — any real components.

**Spherical** ``(r, φ, θ)`` — magnitude, azimuth and elevation::

    x = r cosθ cosφ
    y = r cosθ sinφ
    z = r sinθ

Conversion results satisfy r ≥ 0, φ ∈ [0, 2π), θ ∈ [−π/2, π/2].
Degenerate directions are fixed by convention: on the z-axis φ := 0,
and at the origin θ := 0.

Arithmetic Model
----------------
Every arithmetic operation projects its operands to Rectangular, works
component-wise and returns a Rectangular result::

    Spherical ─┐
               ├─→ Rectangular ──(+ − × ÷ · ×)──→ Rectangular
    Rectangular┘

In-place operators (``+=``, ``-=``, ``*=``, ``/=``, ``@=``) evaluate the
binary operation and rebind the receiver through :meth:`Vector.set`, so
the receiver may change representation.
"""

from enum import Enum

import numpy as np
from numpy.typing import NDArray

from .utils import wrap_two_pi


class VectorType(Enum):
    """Representation tag of a :class:`Vector`."""
    RECTANGULAR = "rectangular"
    SPHERICAL = "spherical"


def _coerce_type(vtype) -> VectorType:
    if isinstance(vtype, VectorType):
        return vtype
    if isinstance(vtype, str):
        for member in VectorType:
            if member.value == vtype.lower():
                return member
    raise ValueError(f"Unsupported vector representation: {vtype!r}")


def _real_scalar(value):
    """Float value of a real 0-d numeric (Python, NumPy scalar or 0-d array), else None."""
    arr = np.asarray(value)
    if arr.ndim != 0 or arr.dtype.kind not in "biuf":
        return None
    return float(arr)


# ════════════════════════════════════════════════════════════════════════════
#  Representation Formulas
# ════════════════════════════════════════════════════════════════════════════

def _spherical_to_rectangular(r: float, phi: float, theta: float) -> NDArray:
    cos_el = np.cos(theta)
    return np.array([
        r * np.cos(phi) * cos_el,
        r * np.sin(phi) * cos_el,
        r * np.sin(theta),
    ])


def _rectangular_to_spherical(x: float, y: float, z: float) -> NDArray:
    xy_sqr = x * x + y * y                  # squared projection on XY
    r = np.sqrt(xy_sqr + z * z)
    phi = 0.0 if (x == 0.0 and y == 0.0) else wrap_two_pi(np.arctan2(y, x))
    rho = np.sqrt(xy_sqr)
    theta = 0.0 if (z == 0.0 and rho == 0.0) else np.arctan2(z, rho)
    return np.array([r, phi, theta], dtype=np.float64)


# ════════════════════════════════════════════════════════════════════════════
#  Vector
# ════════════════════════════════════════════════════════════════════════════

class Vector:
    """Physical 3-vector in Rectangular or Spherical representation.

    Parameters
    ----------
    vtype : VectorType or str — representation of the payload
    a, b, c : float — (x, y, z) or (r, φ, θ) depending on ``vtype``

    Notes
    -----
    Instances are mutable through :meth:`set` and item assignment only.
    Sharing one instance across threads needs external locking.
    """

    __slots__ = ("_type", "_data")

    # defer ndarray ⊕ Vector to the reflected Vector operators
    __array_ufunc__ = None

    def __init__(self, vtype=VectorType.RECTANGULAR,
                 a: float = 0.0, b: float = 0.0, c: float = 0.0):
        self._type = _coerce_type(vtype)
        self._data = np.array([a, b, c], dtype=np.float64)

    @classmethod
    def rectangular(cls, x: float = 0.0, y: float = 0.0,
                    z: float = 0.0) -> "Vector":
        return cls(VectorType.RECTANGULAR, x, y, z)

    @classmethod
    def spherical(cls, r: float = 0.0, phi: float = 0.0,
                  theta: float = 0.0) -> "Vector":
        return cls(VectorType.SPHERICAL, r, phi, theta)

    @classmethod
    def from_array(cls, arr, vtype=VectorType.RECTANGULAR) -> "Vector":
        """Build a vector from any 3-element sequence."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError(f"Expected 3 components, got shape {arr.shape}.")
        return cls(vtype, *arr)

    # ── Representation ──

    @property
    def type(self) -> VectorType:
        return self._type

    def to(self, to_type) -> "Vector":
        """Return a new vector in the requested representation."""
        return convert(self, to_type)

    def copy(self) -> "Vector":
        return Vector(self._type, *self._data)

    def to_array(self) -> NDArray:
        """Copy of the payload in the vector's own representation."""
        return self._data.copy()

    def _rect(self) -> NDArray:
        if self._type is VectorType.RECTANGULAR:
            return self._data
        return _spherical_to_rectangular(*self._data)

    def _sph(self) -> NDArray:
        if self._type is VectorType.SPHERICAL:
            return self._data
        return _rectangular_to_spherical(*self._data)

    @property
    def x(self) -> float:
        return float(self._rect()[0])

    @property
    def y(self) -> float:
        return float(self._rect()[1])

    @property
    def z(self) -> float:
        return float(self._rect()[2])

    @property
    def r(self) -> float:
        return float(self._sph()[0])

    @property
    def phi(self) -> float:
        return float(self._sph()[1])

    @property
    def theta(self) -> float:
        return float(self._sph()[2])

    # ── Mutation ──

    def set(self, other: "Vector") -> "Vector":
        """Rebind all three components (and the representation) in place."""
        if not isinstance(other, Vector):
            raise TypeError(f"set() expects a Vector, got {type(other).__name__}")
        self._type = other._type
        self._data = other._data.copy()
        return self

    @staticmethod
    def _check_index(i) -> int:
        if isinstance(i, (bool, np.bool_)) or not isinstance(i, (int, np.integer)) \
                or not 0 <= i <= 2:
            raise IndexError(f"Vector index must be 0, 1 or 2, got {i!r}")
        return int(i)

    def __getitem__(self, i) -> float:
        """Rectangular component ``i`` (0 = x, 1 = y, 2 = z)."""
        return float(self._rect()[self._check_index(i)])

    def __setitem__(self, i, value: float) -> None:
        i = self._check_index(i)
        if self._type is not VectorType.RECTANGULAR:
            self._data = self._rect()
            self._type = VectorType.RECTANGULAR
        self._data[i] = value

    def __iter__(self):
        return iter(self._data.tolist())

    def __len__(self) -> int:
        return 3

    # ── Algebra ──

    def __neg__(self) -> "Vector":
        return Vector(VectorType.RECTANGULAR, *(-self._rect()))

    def __add__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(VectorType.RECTANGULAR, *(self._rect() + other._rect()))

    def __sub__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return Vector(VectorType.RECTANGULAR, *(self._rect() - other._rect()))

    def __mul__(self, scalar):
        k = _real_scalar(scalar)
        if k is None:
            return NotImplemented
        return Vector(VectorType.RECTANGULAR, *(self._rect() * k))

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        k = _real_scalar(scalar)
        if k is None:
            return NotImplemented
        with np.errstate(divide="ignore", invalid="ignore"):
            out = self._rect() / np.float64(k)
        return Vector(VectorType.RECTANGULAR, *out)

    def __matmul__(self, matrix):
        """Row vector times 3×3 matrix: ``v @ M``."""
        if isinstance(matrix, Vector):
            return NotImplemented
        M = np.asarray(matrix, dtype=np.float64)
        if M.shape != (3, 3):
            raise ValueError(f"Expected (3,3) matrix, got shape {M.shape}.")
        return Vector(VectorType.RECTANGULAR, *(self._rect() @ M))

    def __rmatmul__(self, matrix):
        """3×3 matrix times column vector: ``M @ v``."""
        M = np.asarray(matrix, dtype=np.float64)
        if M.shape != (3, 3):
            raise ValueError(f"Expected (3,3) matrix, got shape {M.shape}.")
        return Vector(VectorType.RECTANGULAR, *(M @ self._rect()))

    def _assign(self, result):
        if result is NotImplemented:
            return NotImplemented
        self.set(result)
        return self

    def __iadd__(self, other):
        return self._assign(self.__add__(other))

    def __isub__(self, other):
        return self._assign(self.__sub__(other))

    def __imul__(self, scalar):
        return self._assign(self.__mul__(scalar))

    def __itruediv__(self, scalar):
        return self._assign(self.__truediv__(scalar))

    def __imatmul__(self, matrix):
        return self._assign(self.__matmul__(matrix))

    def dot(self, other: "Vector") -> float:
        return dot(self, other)

    def cross(self, other: "Vector") -> "Vector":
        return cross(self, other)

    def normalize(self) -> float:
        """Euclidean magnitude (the vector itself is not rescaled)."""
        return normalize(self)

    __abs__ = normalize

    # ── Comparison ──

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self._type is other._type and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def isclose(self, other: "Vector", rtol: float = 1e-12,
                atol: float = 1e-15) -> bool:
        """Compare the physical vectors (Rectangular projections)."""
        return bool(np.allclose(self._rect(), other._rect(), rtol=rtol, atol=atol))

    def __repr__(self) -> str:
        if self._type is VectorType.RECTANGULAR:
            names = ("x", "y", "z")
        else:
            names = ("r", "phi", "theta")
        body = ", ".join(f"{n}={v!r}" for n, v in zip(names, self._data.tolist()))
        return f"Vector.{self._type.value}({body})"


# ════════════════════════════════════════════════════════════════════════════
#  Module-level Operations
# ════════════════════════════════════════════════════════════════════════════

def convert(vector: Vector, to_type) -> Vector:
    """Return ``vector`` in the requested representation.

    Parameters
    ----------
    vector : Vector — source vector (left untouched)
    to_type : VectorType or str — 'rectangular' or 'spherical'

    Returns
    -------
    Vector — new instance; a plain copy when the representation matches

    Raises
    ------
    ValueError if ``to_type`` names no known representation.
    """
    to_type = _coerce_type(to_type)
    if to_type is VectorType.RECTANGULAR:
        return Vector(VectorType.RECTANGULAR, *vector._rect())
    if to_type is VectorType.SPHERICAL:
        return Vector(VectorType.SPHERICAL, *vector._sph())
    raise ValueError(f"Unsupported vector representation: {to_type!r}")


def dot(left: Vector, right: Vector) -> float:
    """Scalar product."""
    v1, v2 = left._rect(), right._rect()
    return float(v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2])


def cross(left: Vector, right: Vector) -> Vector:
    """Vector product (determinant expansion)."""
    v1, v2 = left._rect(), right._rect()
    return Vector(
        VectorType.RECTANGULAR,
        v1[1] * v2[2] - v1[2] * v2[1],
        v1[2] * v2[0] - v1[0] * v2[2],
        v1[0] * v2[1] - v1[1] * v2[0],
    )


def normalize(vector: Vector) -> float:
    """Euclidean magnitude ``sqrt(v · v)``; exactly 0.0 for the zero vector."""
    return float(np.sqrt(dot(vector, vector)))
