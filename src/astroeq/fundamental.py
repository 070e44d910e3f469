"""
astroeq.fundamental — Fundamental Arguments of Nutation
========================================================

Pure functions of T (Julian centuries of TT from J2000.0) returning the
angles against which the nutation series are expanded.

Luni-solar set (5 angles)
-------------------------
Delaunay arguments from Simon et al. (1994), quartic polynomials in T
with coefficients in arcseconds::

    l   mean anomaly of the Moon
    l'  mean anomaly of the Sun
    F   mean argument of latitude of the Moon  (L − Ω)
    D   mean elongation of the Moon from the Sun
    Ω   mean longitude of the Moon's ascending node

Planetary set (14 angles)
-------------------------
MHB2000 linear forms, in radians.  The five lunar/solar angles use
slightly different constants from the luni-solar set, as the planetary
series was fitted with them; the planetary mean longitudes follow
Souchay et al. (1999), and p_A is the general accumulated precession
in longitude.

Reference
---------
Simon, J.-L. et al. (1994), A&A 282, 663-683.
Souchay, J. et al. (1999), A&AS 135, 111.
IERS Conventions (2003), Chapter 5.
"""

import numpy as np
from numpy.typing import NDArray

from .utils import ARCSEC_TO_RAD

DELAUNAY_NAMES = ("l", "l'", "F", "D", "Om")

PLANETARY_NAMES = (
    "l", "l'", "F", "D", "Om",
    "L_Me", "L_Ve", "L_E", "L_Ma", "L_J", "L_Sa", "L_U", "L_Ne",
    "p_A",
)


# ════════════════════════════════════════════════════════════════════════════
#  Luni-Solar (Delaunay) Arguments
# ════════════════════════════════════════════════════════════════════════════

def delaunay_arguments(T: float) -> NDArray:
    """Delaunay arguments (l, l', F, D, Ω) [rad], not reduced to [0, 2π).

    Parameters
    ----------
    T : float — Julian centuries (TT) from J2000.0

    Returns
    -------
    args : (5,) ndarray — ordered as :data:`DELAUNAY_NAMES`
    """
    # Mean anomaly of the Moon
    el = 485868.249036 + T * (1717915923.2178 + T * (31.8792
         + T * (0.051635 + T * -0.00024470)))

    # Mean anomaly of the Sun
    elp = 1287104.79305 + T * (129596581.0481 + T * (-0.5532
          + T * (0.000136 + T * -0.00001149)))

    # Mean argument of latitude of the Moon
    f = 335779.526232 + T * (1739527262.8478 + T * (-12.7512
        + T * (-0.001037 + T * 0.00000417)))

    # Mean elongation of the Moon from the Sun
    d = 1072260.70369 + T * (1602961601.2090 + T * (-6.3706
        + T * (0.006593 + T * -0.00003169)))

    # Mean longitude of the ascending node of the Moon
    om = 450160.398036 + T * (-6962890.5431 + T * (7.4722
         + T * (0.007702 + T * -0.00005939)))

    return np.array([el, elp, f, d, om]) * ARCSEC_TO_RAD


# ════════════════════════════════════════════════════════════════════════════
#  Planetary Arguments
# ════════════════════════════════════════════════════════════════════════════

def general_precession(T: float) -> float:
    """General accumulated precession in longitude p_A [rad]."""
    return (0.02438175 + 0.00000538691 * T) * T


def planetary_arguments(T: float) -> NDArray:
    """Arguments of the planetary nutation series [rad].

    Parameters
    ----------
    T : float — Julian centuries (TT) from J2000.0

    Returns
    -------
    args : (14,) ndarray — ordered as :data:`PLANETARY_NAMES`
    """
    return np.array([
        2.35555598 + 8328.6914269554 * T,       # l
        6.24006013 + 628.301955 * T,            # l'
        1.627905234 + 8433.466158131 * T,       # F
        5.198466741 + 7771.3771468121 * T,      # D
        2.18243920 - 33.757045 * T,             # Ω
        4.402608842 + 2608.7903141574 * T,      # Mercury
        3.176146697 + 1021.3285546211 * T,      # Venus
        1.753470314 + 628.3075849991 * T,       # Earth
        6.203480913 + 334.0612426700 * T,       # Mars
        0.599546497 + 52.9690962641 * T,        # Jupiter
        0.874016757 + 21.3299104960 * T,        # Saturn
        5.481293871 + 7.4781598567 * T,         # Uranus
        5.321159000 + 3.8127774000 * T,         # Neptune
        general_precession(T),                  # p_A
    ])
