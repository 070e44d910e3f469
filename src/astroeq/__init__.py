"""
astroeq — Nutation & Mean/True Equator-of-Date Library
=======================================================

A NumPy library for computing the nutation of the Earth's axis and for
rotating celestial position vectors between the mean and the true
equator and equinox of date.

    T ──→ fundamental arguments ──→ harmonic series ──→ (Δψ, Δε)
                                                           │
    Vector (rect / spherical) ──→ nutation matrix N(Δψ, Δε, ε_m) ──→ Vector

Components
----------

**vector** — :class:`Vector`, one 3-vector type with a Rectangular or
Spherical payload; all arithmetic goes through the Rectangular form.

**fundamental** — Delaunay and planetary fundamental arguments.

**series** — IAU 2000A luni-solar (678 terms) and planetary (687 terms)
tables and their summation.

**nutation** — fast Duffett-Smith model for |T| ≤ 1 century on request,
IAU 2000A with the IAU 2006 precession-rate adjustment otherwise.

**frames** — MEAN ←→ TRUE rotation of vectors and states.

Time is always T, Julian centuries of TT elapsed since J2000.0.
"""

from .vector import (
    Vector,
    VectorType,
    convert,
    dot,
    cross,
    normalize,
)

from .fundamental import (
    delaunay_arguments,
    planetary_arguments,
    general_precession,
    DELAUNAY_NAMES,
    PLANETARY_NAMES,
)

from .series import (
    HarmonicTerm,
    HarmonicSeries,
    LUNI_SOLAR,
    PLANETARY,
    evaluate,
    evaluate_luni_solar,
    evaluate_planetary,
)

from .nutation import (
    NutationResult,
    compute_nutation,
    nutation_jd,
    fast_nutation,
    iau2000a_nutation,
    luni_solar_nutation,
    planetary_nutation,
    precession_adjustment,
    use_fast_model,
    FAST_MODEL_LIMIT,
)

from .obliquity import mean_obliquity, true_obliquity

from .frames import (
    # ── MEAN ↔ TRUE rotation matrices ──
    nutation_matrix,
    mean_to_true_matrix, true_to_mean_matrix,
    # ── Vector transforms ──
    apply_nutation,
    mean_to_true, true_to_mean,
    state_mean_to_true, state_true_to_mean,
    # ── Unified API ──
    get_dcm, transform,
    FRAMES,
)

from .utils import (
    julian_date,
    julian_centuries,
    jd_from_centuries,
    arcsec_to_rad,
    rad_to_arcsec,
    ARCSEC_TO_RAD,
    DEG_TO_RAD,
    J2000,
    DAYS_PER_CENTURY,
)

__version__ = "1.0.0"
__all__ = [
    # ── Constants ──
    "ARCSEC_TO_RAD", "DEG_TO_RAD", "J2000", "DAYS_PER_CENTURY",
    "FAST_MODEL_LIMIT", "DELAUNAY_NAMES", "PLANETARY_NAMES",
    # ── Vectors ──
    "Vector", "VectorType", "convert", "dot", "cross", "normalize",
    # ── Fundamental arguments ──
    "delaunay_arguments", "planetary_arguments", "general_precession",
    # ── Harmonic series ──
    "HarmonicTerm", "HarmonicSeries", "LUNI_SOLAR", "PLANETARY",
    "evaluate", "evaluate_luni_solar", "evaluate_planetary",
    # ── Nutation ──
    "NutationResult", "compute_nutation", "nutation_jd",
    "fast_nutation", "iau2000a_nutation",
    "luni_solar_nutation", "planetary_nutation",
    "precession_adjustment", "use_fast_model",
    # ── Obliquity ──
    "mean_obliquity", "true_obliquity",
    # ── Frames ──
    "nutation_matrix", "mean_to_true_matrix", "true_to_mean_matrix",
    "apply_nutation", "mean_to_true", "true_to_mean",
    "state_mean_to_true", "state_true_to_mean",
    "get_dcm", "transform", "FRAMES",
    # ── Utilities ──
    "julian_date", "julian_centuries", "jd_from_centuries",
    "arcsec_to_rad", "rad_to_arcsec",
]
