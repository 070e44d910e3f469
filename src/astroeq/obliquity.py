"""
astroeq.obliquity — Obliquity of the Ecliptic
==============================================

Mean obliquity from the IAU 2006 precession model (Capitaine et al. 2003,
P03), and the true obliquity obtained by adding the nutation in obliquity.
Any callable ``T -> radians`` can stand in for :func:`mean_obliquity`
wherever the frame functions accept an ``obliquity`` argument.

Reference
---------
Capitaine, N., Wallace, P.T., Chapront, J. (2003), A&A 412, 567-586.
"""

from .nutation import compute_nutation
from .utils import ARCSEC_TO_RAD


def mean_obliquity(T: float) -> float:
    """Mean obliquity of the ecliptic ε_A [rad] (IAU 2006).

    ::

        ε_A = 84381.406″ − 46.836769″T − 0.0001831″T² + 0.00200340″T³
              − 0.000000576″T⁴ − 0.0000000434″T⁵
    """
    eps = 84381.406 + T * (-46.836769 + T * (-0.0001831 + T * (0.00200340
          + T * (-0.000000576 + T * -0.0000000434))))
    return eps * ARCSEC_TO_RAD


def true_obliquity(T: float, fast: bool = False) -> float:
    """True obliquity ε = ε_A + Δε [rad]."""
    return mean_obliquity(T) + compute_nutation(T, fast=fast).deps
