"""
astroeq.series — Harmonic Series Evaluation
============================================

Generic summation engine for nutation series.  A series is a table of N
terms; term i carries an integer multiplier row ``m_i`` (one entry per
fundamental argument) and a coefficient row ``c_i``.  Its argument is
the dot product of the multipliers with the fundamental arguments::

    a_i = Σ_k m_i[k] · arg[k]

Two coefficient layouts are supported.

**Luni-solar** (6 coefficients, amplitudes linear in T)::

    Δψ += (c0 + c1·T) sin a_i + c2 cos a_i
    Δε += (c3 + c4·T) cos a_i + c5 sin a_i

**Planetary** (4 coefficients, constant amplitudes)::

    Δψ += c0 sin a_i + c1 cos a_i
    Δε += c2 sin a_i + c3 cos a_i

Sums are returned in the table's own unit (0.1 µas for IAU 2000A);
conversion to radians is left to the caller.

The tables are stored as (N, K) multiplier and (N, C) coefficient
matrices, so all N arguments are formed in one matrix product and the
reduction is a single vectorized sum.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from . import _iau2000a

LUNI_SOLAR_WIDTH = 6
PLANETARY_WIDTH = 4


@dataclass(frozen=True)
class HarmonicTerm:
    """One term of a nutation series."""
    multipliers: tuple[int, ...]
    coefficients: tuple[float, ...]

    def argument(self, args: NDArray) -> float:
        """Term argument ``Σ m[k]·arg[k]`` [rad]."""
        return float(np.dot(self.multipliers, args))


@dataclass(frozen=True, eq=False)
class HarmonicSeries:
    """Read-only table of harmonic terms.

    Attributes
    ----------
    name : str — label used in messages
    multipliers : (N, K) int ndarray — argument multipliers per term
    coefficients : (N, C) float ndarray — amplitudes per term (C = 6 or 4)
    """
    name: str
    multipliers: NDArray
    coefficients: NDArray

    def __post_init__(self):
        M = np.array(self.multipliers, dtype=np.int64)
        C = np.array(self.coefficients, dtype=np.float64)
        if M.ndim != 2 or C.ndim != 2 or M.shape[0] != C.shape[0]:
            raise ValueError(
                f"{self.name}: multipliers {M.shape} and coefficients "
                f"{C.shape} must be 2-D with one row per term")
        if C.shape[1] not in (LUNI_SOLAR_WIDTH, PLANETARY_WIDTH):
            raise ValueError(
                f"{self.name}: expected {LUNI_SOLAR_WIDTH} or {PLANETARY_WIDTH} "
                f"coefficients per term, got {C.shape[1]}")
        M.flags.writeable = False
        C.flags.writeable = False
        object.__setattr__(self, "multipliers", M)
        object.__setattr__(self, "coefficients", C)

    @property
    def arity(self) -> int:
        """Number of fundamental arguments per term."""
        return self.multipliers.shape[1]

    def __len__(self) -> int:
        return self.multipliers.shape[0]

    def term(self, i: int) -> HarmonicTerm:
        return HarmonicTerm(
            multipliers=tuple(int(m) for m in self.multipliers[i]),
            coefficients=tuple(float(c) for c in self.coefficients[i]),
        )

    def __iter__(self):
        for i in range(len(self)):
            yield self.term(i)

    def arguments(self, args: NDArray) -> NDArray:
        """Arguments of every term [rad], shape (N,)."""
        args = np.asarray(args, dtype=np.float64)
        if args.shape != (self.arity,):
            raise ValueError(
                f"{self.name}: expected {self.arity} fundamental arguments, "
                f"got shape {args.shape}")
        return self.multipliers @ args


LUNI_SOLAR = HarmonicSeries(
    "IAU 2000A luni-solar",
    _iau2000a.LUNI_SOLAR_MULTIPLIERS,
    _iau2000a.LUNI_SOLAR_COEFFICIENTS,
)

PLANETARY = HarmonicSeries(
    "IAU 2000A planetary",
    _iau2000a.PLANETARY_MULTIPLIERS,
    _iau2000a.PLANETARY_COEFFICIENTS,
)


# ════════════════════════════════════════════════════════════════════════════
#  Evaluation
# ════════════════════════════════════════════════════════════════════════════

def evaluate_luni_solar(series: HarmonicSeries, args: NDArray,
                        T: float) -> tuple[float, float]:
    """Sum a luni-solar series (time-dependent amplitudes).

    Parameters
    ----------
    series : HarmonicSeries — 6-coefficient table
    args : (K,) — fundamental arguments [rad]
    T : float — Julian centuries (TT) from J2000.0

    Returns
    -------
    dpsi, deps : float — longitude / obliquity sums, in table units
    """
    if series.coefficients.shape[1] != LUNI_SOLAR_WIDTH:
        raise ValueError(f"{series.name} is not a luni-solar series")
    a = series.arguments(args)
    s, c = np.sin(a), np.cos(a)
    C = series.coefficients
    dpsi = np.sum((C[:, 0] + C[:, 1] * T) * s + C[:, 2] * c)
    deps = np.sum((C[:, 3] + C[:, 4] * T) * c + C[:, 5] * s)
    return float(dpsi), float(deps)


def evaluate_planetary(series: HarmonicSeries,
                       args: NDArray) -> tuple[float, float]:
    """Sum a planetary series (constant amplitudes).

    Returns
    -------
    dpsi, deps : float — longitude / obliquity sums, in table units
    """
    if series.coefficients.shape[1] != PLANETARY_WIDTH:
        raise ValueError(f"{series.name} is not a planetary series")
    a = series.arguments(args)
    s, c = np.sin(a), np.cos(a)
    C = series.coefficients
    dpsi = np.sum(C[:, 0] * s + C[:, 1] * c)
    deps = np.sum(C[:, 2] * s + C[:, 3] * c)
    return float(dpsi), float(deps)


def evaluate(series: HarmonicSeries, args: NDArray,
             T: float = 0.0) -> tuple[float, float]:
    """Sum any series, choosing the formula from its coefficient layout."""
    if series.coefficients.shape[1] == LUNI_SOLAR_WIDTH:
        return evaluate_luni_solar(series, args, T)
    return evaluate_planetary(series, args)
