"""
astroeq.nutation — Nutation in Longitude and Obliquity
=======================================================

Two models are available and chosen by a time-range rule.

**Fast model** (Duffett-Smith, *Astronomy with your Personal Computer*)
  13 periodic terms in five auxiliary angles; good to a fraction of an
  arcsecond and only used within one Julian century of J2000.0.

**IAU 2000A** (MHB2000, free core nutation omitted)
  678 luni-solar plus 687 planetary terms, evaluated through
  :mod:`astroeq.series`, followed by the Wallace & Capitaine (2006)
  adjustment for the IAU 2006 precession rates::

      Δψ += Δψ · (0.4697e-6 − 2.7774e-6 T)
      Δε −= Δε · 2.7774e-6 T

Model selection
---------------
::

    fast and |T| ≤ FAST_MODEL_LIMIT  →  fast model
    otherwise                         →  IAU 2000A (+ adjustment)

All results are in radians.

Reference
---------
Mathews, P.M., Herring, T.A., Buffet, B.A. (2002), J. Geophys. Res. 107.
Wallace, P.T., Capitaine, N. (2006), A&A 459, 981-985, Eq. 5.
Duffett-Smith, P. (1985), *Astronomy with your Personal Computer*.
"""

import logging
from typing import NamedTuple

import numpy as np

from .fundamental import delaunay_arguments, planetary_arguments
from .series import LUNI_SOLAR, PLANETARY, evaluate_luni_solar, evaluate_planetary
from .utils import ARCSEC_TO_RAD, DEG_TO_RAD, julian_centuries

logger = logging.getLogger(__name__)

FAST_MODEL_LIMIT = 1.0          # |T| bound for the fast model [centuries]
SERIES_UNIT_TO_RAD = ARCSEC_TO_RAD / 1.0e7   # 0.1 µas → rad


class NutationResult(NamedTuple):
    """Nutation in longitude and obliquity [rad]."""
    dpsi: float
    deps: float


# ════════════════════════════════════════════════════════════════════════════
#  Fast Model
# ════════════════════════════════════════════════════════════════════════════

def _mean_angle_deg(rate: float, T: float) -> float:
    """Fractional revolutions of ``rate·T`` expressed in degrees."""
    aq = rate * T
    return 360.0 * (aq - np.floor(aq))


def fast_nutation(T: float) -> NutationResult:
    """Approximate nutation from Duffett-Smith's 13-term formula.

    Parameters
    ----------
    T : float — Julian centuries (TT) from J2000.0, passed to the
        polynomials unchanged

    Returns
    -------
    NutationResult — (Δψ, Δε) [rad]
    """
    T2 = T * T

    L1 = 279.6967 + 0.000303 * T2 + _mean_angle_deg(100.0021358, T)
    L2 = 2.0 * L1 * DEG_TO_RAD
    D1 = 270.4342 - 0.001133 * T2 + _mean_angle_deg(1336.855231, T)
    D2 = 2.0 * D1 * DEG_TO_RAD
    M1 = (358.4758 - 0.00015 * T2 + _mean_angle_deg(99.99736056, T)) * DEG_TO_RAD
    M2 = (296.1046 + 0.009192 * T2 + _mean_angle_deg(1325.552359, T)) * DEG_TO_RAD
    N1 = (259.1833 + 0.002078 * T2 - _mean_angle_deg(5.372616667, T)) * DEG_TO_RAD
    # doubled after the conversion of N1, unlike L2 and D2
    N2 = 2.0 * N1

    dp = (-17.2327 - 0.01737 * T) * np.sin(N1)
    dp += (-1.2729 - 0.00013 * T) * np.sin(L2) + 0.2088 * np.sin(N2)
    dp += -0.2037 * np.sin(D2) + (0.1261 - 0.00031 * T) * np.sin(M1)
    dp += 0.0675 * np.sin(M2) - (0.0497 - 0.00012 * T) * np.sin(L2 + M1)
    dp += -0.0342 * np.sin(D2 - N1) - 0.0261 * np.sin(D2 + M2)
    dp += 0.0214 * np.sin(L2 - M1) - 0.0149 * np.sin(L2 - D2 + M2)
    dp += 0.0124 * np.sin(L2 - N1) + 0.0114 * np.sin(D2 - M2)

    de = (9.21 + 0.00091 * T) * np.cos(N1)
    de += (0.5522 - 0.00029 * T) * np.cos(L2) - 0.0904 * np.cos(N2)
    de += 0.0884 * np.cos(D2) + 0.0216 * np.cos(L2 + M1)
    de += 0.0183 * np.cos(D2 - N1) + 0.0113 * np.cos(D2 + M2)
    de += -0.0093 * np.cos(L2 - M1) - 0.0066 * np.cos(L2 - N1)

    return NutationResult(float(dp * ARCSEC_TO_RAD), float(de * ARCSEC_TO_RAD))


# ════════════════════════════════════════════════════════════════════════════
#  IAU 2000A Series
# ════════════════════════════════════════════════════════════════════════════

def luni_solar_nutation(T: float) -> NutationResult:
    """Luni-solar part of IAU 2000A [rad]."""
    dp, de = evaluate_luni_solar(LUNI_SOLAR, delaunay_arguments(T), T)
    return NutationResult(dp * SERIES_UNIT_TO_RAD, de * SERIES_UNIT_TO_RAD)


def planetary_nutation(T: float) -> NutationResult:
    """Planetary part of IAU 2000A [rad]."""
    dp, de = evaluate_planetary(PLANETARY, planetary_arguments(T))
    return NutationResult(dp * SERIES_UNIT_TO_RAD, de * SERIES_UNIT_TO_RAD)


def iau2000a_nutation(T: float) -> NutationResult:
    """IAU 2000A nutation, luni-solar + planetary, without the
    precession-rate adjustment."""
    ls = luni_solar_nutation(T)
    pl = planetary_nutation(T)
    return NutationResult(ls.dpsi + pl.dpsi, ls.deps + pl.deps)


def precession_adjustment(nut: NutationResult, T: float) -> NutationResult:
    """Adjust IAU 2000A nutation to the IAU 2006 precession rates.

    Wallace & Capitaine (2006), Eq. 5.
    """
    dpsi, deps = nut
    dpsi += dpsi * (0.4697e-6 - 2.7774e-6 * T)
    deps -= deps * (2.7774e-6 * T)
    return NutationResult(dpsi, deps)


# ════════════════════════════════════════════════════════════════════════════
#  Model Selection
# ════════════════════════════════════════════════════════════════════════════

def use_fast_model(T: float, fast: bool) -> bool:
    """True when the fast model applies: requested and |T| ≤ 1 century."""
    return bool(fast) and abs(T) <= FAST_MODEL_LIMIT


def compute_nutation(T: float, fast: bool = False) -> NutationResult:
    """Nutation in longitude and obliquity [rad].

    Parameters
    ----------
    T : float — Julian centuries (TT) from J2000.0
    fast : bool — prefer the fast model; honoured only for |T| ≤ 1

    Returns
    -------
    NutationResult — (Δψ, Δε) [rad]
    """
    if use_fast_model(T, fast):
        logger.debug("nutation: fast model at T=%.9f", T)
        return fast_nutation(T)
    if fast:
        logger.debug("nutation: T=%.9f outside ±%.1f cy, using IAU 2000A",
                     T, FAST_MODEL_LIMIT)
    return precession_adjustment(iau2000a_nutation(T), T)


def nutation_jd(jd_tt: float, fast: bool = False) -> NutationResult:
    """:func:`compute_nutation` for a Julian Date (TT)."""
    return compute_nutation(julian_centuries(jd_tt), fast=fast)
