"""
astroeq.frames — Mean / True Equator-of-Date Frame Hub
=======================================================

Nutation rotates the mean equator and equinox of date into the true
equator and equinox of date.

Frame Definitions
-----------------

**MEAN (mean equator and equinox of date)**
  - X: Mean equinox of date
  - Z: Mean celestial pole of date (precession only)
  - Y: Completes right-hand system

**TRUE (true equator and equinox of date)**
  - X: True equinox of date
  - Z: True celestial pole of date (precession + nutation)
  - Y: Completes right-hand system

Nutation Matrix
---------------
Built from the mean obliquity ε_m, the true obliquity ε_t = ε_m + Δε and
the nutation in longitude Δψ (Explanatory Supplement to the Astronomical
Almanac, pp. 114-115)::

    N = R1(−ε_t) · R3(−Δψ) · R1(ε_m)

    r_true = N · r_mean
    r_mean = Nᵀ · r_true

Transform Graph
---------------
::

    MEAN ←→ TRUE

Every entry point takes T (Julian centuries of TT from J2000.0), the
``fast`` model preference of :func:`astroeq.nutation.compute_nutation`,
and an ``obliquity`` provider (any callable ``T -> radians``).
"""

import logging

import numpy as np
from numpy.typing import NDArray

from .nutation import compute_nutation
from .obliquity import mean_obliquity
from .utils import as_vector3
from .vector import Vector, VectorType

logger = logging.getLogger(__name__)

FRAMES = ("mean", "true")


# ════════════════════════════════════════════════════════════════════════════
#  Internal Helpers
# ════════════════════════════════════════════════════════════════════════════

def _apply_dcm(R: NDArray, vec: NDArray) -> NDArray:
    """Apply 3×3 DCM to a single (3,) or batch (N,3) of vectors."""
    vec = as_vector3(vec)
    if vec.ndim == 1:
        return R @ vec
    return (R @ vec.T).T


# ════════════════════════════════════════════════════════════════════════════
#  Nutation Matrix
# ════════════════════════════════════════════════════════════════════════════

def nutation_matrix(dpsi: float, deps: float, eps_mean: float) -> NDArray:
    """Build the MEAN→TRUE nutation matrix.

    Parameters
    ----------
    dpsi : float — nutation in longitude Δψ [rad]
    deps : float — nutation in obliquity Δε [rad]
    eps_mean : float — mean obliquity of date ε_m [rad]

    Returns
    -------
    N : (3,3) ndarray — DCM such that r_true = N @ r_mean
    """
    eps_true = eps_mean + deps

    cobm, sobm = np.cos(eps_mean), np.sin(eps_mean)
    cobt, sobt = np.cos(eps_true), np.sin(eps_true)
    cpsi, spsi = np.cos(dpsi), np.sin(dpsi)

    xx = cpsi
    yx = -spsi * cobm
    zx = -spsi * sobm
    xy = spsi * cobt
    yy = cpsi * cobm * cobt + sobm * sobt
    zy = cpsi * sobm * cobt - cobm * sobt
    xz = spsi * sobt
    yz = cpsi * cobm * sobt - sobm * cobt
    zz = cpsi * sobm * sobt + cobm * cobt

    return np.array([
        [xx, yx, zx],
        [xy, yy, zy],
        [xz, yz, zz],
    ])


def mean_to_true_matrix(T: float, fast: bool = False,
                        obliquity=mean_obliquity) -> NDArray:
    """MEAN→TRUE 3×3 rotation matrix at T.

    Parameters
    ----------
    T : float — Julian centuries (TT) from J2000.0
    fast : bool — prefer the fast nutation model (|T| ≤ 1 only)
    obliquity : callable — mean obliquity provider, T → ε_m [rad]

    Returns
    -------
    N : (3,3) ndarray — DCM such that r_true = N @ r_mean
    """
    dpsi, deps = compute_nutation(T, fast=fast)
    eps_mean = obliquity(T)
    logger.debug("nutation matrix: T=%.9f dpsi=%.3e deps=%.3e eps=%.9f",
                 T, dpsi, deps, eps_mean)
    return nutation_matrix(dpsi, deps, eps_mean)


def true_to_mean_matrix(T: float, fast: bool = False,
                        obliquity=mean_obliquity) -> NDArray:
    """TRUE→MEAN 3×3 rotation matrix (transpose of MEAN→TRUE)."""
    return mean_to_true_matrix(T, fast=fast, obliquity=obliquity).T


# ════════════════════════════════════════════════════════════════════════════
#  Vector Transforms
# ════════════════════════════════════════════════════════════════════════════

def apply_nutation(T: float, fast: bool, vector: Vector,
                   mean_to_true: bool = True,
                   obliquity=mean_obliquity) -> Vector:
    """Nutate a :class:`~astroeq.vector.Vector` between MEAN and TRUE.

    Parameters
    ----------
    T : float — Julian centuries (TT) from J2000.0
    fast : bool — prefer the fast nutation model (|T| ≤ 1 only)
    vector : Vector — input in either representation (left untouched)
    mean_to_true : bool — True for MEAN→TRUE, False for TRUE→MEAN
    obliquity : callable — mean obliquity provider, T → ε_m [rad]

    Returns
    -------
    Vector — new Rectangular vector in the target frame
    """
    N = mean_to_true_matrix(T, fast=fast, obliquity=obliquity)
    if not mean_to_true:
        N = N.T
    rect = vector.to(VectorType.RECTANGULAR).to_array()
    return Vector.from_array(N @ rect)


def mean_to_true(vec_mean: NDArray, T: float, fast: bool = False,
                 obliquity=mean_obliquity) -> NDArray:
    """Transform vector(s) from MEAN to TRUE.

    Parameters
    ----------
    vec_mean : (3,) or (N,3) — vector(s) in the MEAN frame
    T : float — Julian centuries (TT) from J2000.0

    Returns
    -------
    vec_true : same shape — vector(s) in the TRUE frame
    """
    return _apply_dcm(mean_to_true_matrix(T, fast, obliquity), vec_mean)


def true_to_mean(vec_true: NDArray, T: float, fast: bool = False,
                 obliquity=mean_obliquity) -> NDArray:
    """Transform vector(s) from TRUE to MEAN."""
    return _apply_dcm(true_to_mean_matrix(T, fast, obliquity), vec_true)


def state_mean_to_true(r_mean: NDArray, v_mean: NDArray, T: float,
                       fast: bool = False,
                       obliquity=mean_obliquity) -> tuple[NDArray, NDArray]:
    """Transform full state (position + velocity) from MEAN to TRUE.

    The nutation matrix changes slowly enough that both halves of the
    state are rotated by the same matrix::

        r_true = N · r_mean
        v_true = N · v_mean
    """
    N = mean_to_true_matrix(T, fast, obliquity)
    return _apply_dcm(N, r_mean), _apply_dcm(N, v_mean)


def state_true_to_mean(r_true: NDArray, v_true: NDArray, T: float,
                       fast: bool = False,
                       obliquity=mean_obliquity) -> tuple[NDArray, NDArray]:
    """Transform full state from TRUE to MEAN."""
    N = true_to_mean_matrix(T, fast, obliquity)
    return _apply_dcm(N, r_true), _apply_dcm(N, v_true)


# ════════════════════════════════════════════════════════════════════════════
#  Unified API
# ════════════════════════════════════════════════════════════════════════════

def get_dcm(from_frame: str, to_frame: str, T: float,
            fast: bool = False, obliquity=mean_obliquity) -> NDArray:
    """Get the 3×3 DCM for any supported frame pair.

    Parameters
    ----------
    from_frame, to_frame : str — 'mean' or 'true'
    T : float — Julian centuries (TT) from J2000.0

    Returns
    -------
    R : (3,3) ndarray — DCM such that v_to = R @ v_from
    """
    fr = from_frame.lower()
    to = to_frame.lower()
    if fr not in FRAMES or to not in FRAMES:
        raise ValueError(f"Unknown frame. Valid: {FRAMES}")
    if fr == to:
        return np.eye(3)
    if fr == "mean":
        return mean_to_true_matrix(T, fast, obliquity)
    return true_to_mean_matrix(T, fast, obliquity)


def transform(vec: NDArray, from_frame: str, to_frame: str, T: float,
              fast: bool = False, obliquity=mean_obliquity) -> NDArray:
    """Transform position vector(s) between any two frames."""
    R = get_dcm(from_frame, to_frame, T, fast, obliquity)
    return _apply_dcm(R, vec)
