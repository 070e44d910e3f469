"""
astroeq.utils — Foundational Utilities
=======================================

Unit constants, angle wrapping and dynamical-time helpers shared by the
vector, nutation and frame modules.  All functions are pure NumPy.
"""

import numpy as np
from numpy.typing import NDArray

# ── Angular Units ───────────────────────────────────────────────────────────
TWO_PI = 2.0 * np.pi
DEG_TO_RAD = np.pi / 180.0
RAD_TO_DEG = 180.0 / np.pi
ARCSEC_TO_RAD = DEG_TO_RAD / 3600.0     # 1″ [rad]
RAD_TO_ARCSEC = 1.0 / ARCSEC_TO_RAD

# ── Time Scale ──────────────────────────────────────────────────────────────
J2000 = 2_451_545.0                     # JD(TT) of J2000.0
DAYS_PER_CENTURY = 36_525.0             # Julian century [days]


# ── Angle Helpers ───────────────────────────────────────────────────────────

def wrap_two_pi(angle: float) -> float:
    """Wrap an angle [rad] to [0, 2π)."""
    wrapped = float(np.mod(angle, TWO_PI))
    # a tiny negative input rounds up to exactly 2π
    return 0.0 if wrapped >= TWO_PI else wrapped


def arcsec_to_rad(arcsec):
    """Arcseconds → radians."""
    return arcsec * ARCSEC_TO_RAD


def rad_to_arcsec(rad):
    """Radians → arcseconds."""
    return rad * RAD_TO_ARCSEC


def as_vector3(v) -> NDArray:
    """Coerce input to a float64 (3,) or (N,3) array.

    Raises
    ------
    ValueError if the trailing dimension is not 3.
    """
    v = np.asarray(v, dtype=np.float64)
    if v.ndim not in (1, 2) or v.shape[-1] != 3:
        raise ValueError(f"Expected (3,) or (N,3) array, got shape {v.shape}.")
    return v


# ── Time Utilities ──────────────────────────────────────────────────────────

def julian_date(year: int, month: int, day: int,
                hour: float = 0.0, minute: float = 0.0,
                second: float = 0.0) -> float:
    """Compute Julian Date from a Gregorian calendar date.

    The result is in whatever time scale the input is expressed in; pass
    a TT date to get JD(TT) for :func:`julian_centuries`.
    """
    if month <= 2:
        year -= 1
        month += 12
    A = int(year / 100)
    B = 2 - A + int(A / 4)
    JD = (int(365.25 * (year + 4716))
          + int(30.6001 * (month + 1))
          + day + B - 1524.5)
    JD += (hour + minute / 60.0 + second / 3600.0) / 24.0
    return JD


def julian_centuries(jd_tt: float) -> float:
    """Julian centuries of dynamical time elapsed since J2000.0.

    ::

        T = (JD_TT − 2451545.0) / 36525
    """
    return (jd_tt - J2000) / DAYS_PER_CENTURY


def jd_from_centuries(T: float) -> float:
    """Inverse of :func:`julian_centuries`."""
    return J2000 + T * DAYS_PER_CENTURY
