#!/usr/bin/env python3
"""
test_astroeq.py — Comprehensive Unit Test Suite
================================================

Tests all modules of the astroeq library:

  1. utils        — constants, angle helpers, dynamical time
  2. vector       — conversions, algebra, in-place ops, indexing
  3. fundamental  — Delaunay and planetary arguments
  4. series       — IAU 2000A tables, term evaluation
  5. nutation     — model selection, IAU 2000A vs. SOFA, adjustment
  6. obliquity    — mean / true obliquity
  7. frames       — nutation matrix, MEAN↔TRUE transforms, states

Run:  python3 test_astroeq.py   (or collect with pytest)
"""

import sys
import os
import traceback

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "src"))

import numpy as np
import numpy.testing as npt

from astroeq import *
from astroeq.utils import wrap_two_pi, as_vector3, TWO_PI

# ═══════════════════════════════════════════════════════════════════════════
#  Shared Fixtures
# ═══════════════════════════════════════════════════════════════════════════

# SOFA test epoch: MJD 53736.0 TT (2006 January 15)
JD_SOFA = 2_453_736.5
T_SOFA = julian_centuries(JD_SOFA)

# iauNut00a / iauNut06a reference values at JD_SOFA
DPSI_00A = -0.9630909107115518431e-5
DEPS_00A = 0.4063239174001678710e-4
DPSI_06A = -0.9630912025820308797e-5
DEPS_06A = 0.4063238496887249798e-4

T_SAMPLES = [-3.0, -1.0, -0.25, 0.0, 0.06, 0.5, 1.0, 1.5, 4.0]

_rng = np.random.default_rng(20170101)
RANDOM_VECS = _rng.normal(size=(25, 3)) * 1.0e3

# Duffett-Smith 13-term nutation, as term tables over the angles
# (N1, L2, N2, D2, M1, M2): (c0 [″], c1 [″/cy], multipliers)
FAST_DPSI_TERMS = [
    (-17.2327, -0.01737, (1, 0, 0, 0, 0, 0)),
    (-1.2729, -0.00013, (0, 1, 0, 0, 0, 0)),
    (0.2088, 0.0, (0, 0, 1, 0, 0, 0)),
    (-0.2037, 0.0, (0, 0, 0, 1, 0, 0)),
    (0.1261, -0.00031, (0, 0, 0, 0, 1, 0)),
    (0.0675, 0.0, (0, 0, 0, 0, 0, 1)),
    (-0.0497, 0.00012, (0, 1, 0, 0, 1, 0)),
    (-0.0342, 0.0, (-1, 0, 0, 1, 0, 0)),
    (-0.0261, 0.0, (0, 0, 0, 1, 0, 1)),
    (0.0214, 0.0, (0, 1, 0, 0, -1, 0)),
    (-0.0149, 0.0, (0, 1, 0, -1, 0, 1)),
    (0.0124, 0.0, (-1, 1, 0, 0, 0, 0)),
    (0.0114, 0.0, (0, 0, 0, 1, 0, -1)),
]
FAST_DEPS_TERMS = [
    (9.21, 0.00091, (1, 0, 0, 0, 0, 0)),
    (0.5522, -0.00029, (0, 1, 0, 0, 0, 0)),
    (-0.0904, 0.0, (0, 0, 1, 0, 0, 0)),
    (0.0884, 0.0, (0, 0, 0, 1, 0, 0)),
    (0.0216, 0.0, (0, 1, 0, 0, 1, 0)),
    (0.0183, 0.0, (-1, 0, 0, 1, 0, 0)),
    (0.0113, 0.0, (0, 0, 0, 1, 0, 1)),
    (-0.0093, 0.0, (0, 1, 0, 0, -1, 0)),
    (-0.0066, 0.0, (-1, 1, 0, 0, 0, 0)),
]


def fast_reference(T, double_converted_n2=False):
    """Duffett-Smith (Δψ, Δε) [rad] and the N2 angle, summed term by term.

    ``double_converted_n2`` applies the degree→radian factor a second time
    to N2, as the printed BASIC listing does.
    """
    def turns_deg(rate):
        aq = rate * T
        return 360.0 * (aq - np.floor(aq))

    T2 = T * T
    L1 = 279.6967 + 0.000303 * T2 + turns_deg(100.0021358)
    D1 = 270.4342 - 0.001133 * T2 + turns_deg(1336.855231)
    M1 = 358.4758 - 0.00015 * T2 + turns_deg(99.99736056)
    M2 = 296.1046 + 0.009192 * T2 + turns_deg(1325.552359)
    N1 = 259.1833 + 0.002078 * T2 - turns_deg(5.372616667)
    n1 = N1 * DEG_TO_RAD
    N2 = 2.0 * n1 * DEG_TO_RAD if double_converted_n2 else 2.0 * n1
    angles = np.array([n1, 2.0 * L1 * DEG_TO_RAD, N2,
                       2.0 * D1 * DEG_TO_RAD, M1 * DEG_TO_RAD, M2 * DEG_TO_RAD])

    dp = sum((c0 + c1 * T) * np.sin(np.dot(m, angles)) for c0, c1, m in FAST_DPSI_TERMS)
    de = sum((c0 + c1 * T) * np.cos(np.dot(m, angles)) for c0, c1, m in FAST_DEPS_TERMS)
    return dp * ARCSEC_TO_RAD, de * ARCSEC_TO_RAD, angles[2]


# ═══════════════════════════════════════════════════════════════════════════
#  Test Runner Infrastructure
# ═══════════════════════════════════════════════════════════════════════════

_results = {"pass": 0, "fail": 0, "errors": []}


def run_test(name, fn):
    """Execute a single test, track results."""
    try:
        fn()
        print(f"  PASS  {name}")
        _results["pass"] += 1
    except Exception as ex:
        print(f"  FAIL  {name}")
        print(f"         {ex}")
        traceback.print_exc(limit=3)
        _results["fail"] += 1
        _results["errors"].append(name)


def _group_passed(failed_before):
    """Fail the enclosing group when any of its cases failed."""
    failed = _results["errors"][failed_before:]
    assert not failed, f"failed: {', '.join(failed)}"


# ═══════════════════════════════════════════════════════════════════════════
#  1. UTILS MODULE
# ═══════════════════════════════════════════════════════════════════════════

def test_utils():
    print("\n── utils ──")
    before = _results["fail"]

    def t_jd_j2000():
        npt.assert_allclose(julian_date(2000, 1, 1, 12), J2000, atol=1e-6)
    run_test("JD at J2000.0 = 2451545.0", t_jd_j2000)

    def t_centuries_zero():
        assert julian_centuries(J2000) == 0.0
    run_test("T(J2000.0) = 0", t_centuries_zero)

    def t_centuries_one():
        npt.assert_allclose(julian_centuries(J2000 + DAYS_PER_CENTURY), 1.0, atol=1e-15)
    run_test("T one century later = 1", t_centuries_one)

    def t_centuries_roundtrip():
        for T in T_SAMPLES:
            npt.assert_allclose(julian_centuries(jd_from_centuries(T)), T, atol=1e-12)
    run_test("JD ↔ T roundtrip", t_centuries_roundtrip)

    def t_sofa_epoch():
        npt.assert_allclose(T_SOFA, 0.06, atol=1e-15)
    run_test("SOFA epoch T = 0.06", t_sofa_epoch)

    def t_arcsec():
        npt.assert_allclose(ARCSEC_TO_RAD, np.pi / 648000.0, rtol=1e-15)
        npt.assert_allclose(rad_to_arcsec(arcsec_to_rad(1.234)), 1.234, rtol=1e-15)
    run_test("arcsec ↔ rad", t_arcsec)

    def t_wrap():
        assert wrap_two_pi(-1e-18) == 0.0
        npt.assert_allclose(wrap_two_pi(-np.pi / 2), 1.5 * np.pi, rtol=1e-15)
        npt.assert_allclose(wrap_two_pi(5 * np.pi), np.pi, rtol=1e-14)
        assert 0.0 <= wrap_two_pi(TWO_PI) < TWO_PI
    run_test("wrap_two_pi in [0, 2π)", t_wrap)

    def t_as_vector3_bad():
        try:
            as_vector3(np.zeros(4))
            assert False, "Should raise"
        except ValueError:
            pass
    run_test("as_vector3 bad shape → ValueError", t_as_vector3_bad)

    _group_passed(before)


# ═══════════════════════════════════════════════════════════════════════════
#  2. VECTOR MODULE
# ═══════════════════════════════════════════════════════════════════════════

def test_vector():
    print("\n── vector ──")
    before = _results["fail"]

    def sph(v):
        return convert(v, VectorType.SPHERICAL)

    def t_x_axis():
        s = sph(Vector.rectangular(1, 0, 0))
        assert s.type is VectorType.SPHERICAL
        npt.assert_allclose(s.to_array(), [1.0, 0.0, 0.0], atol=1e-15)
    run_test("rect(1,0,0) → sph(1, 0, 0)", t_x_axis)

    def t_y_axis():
        s = sph(Vector.rectangular(0, 1, 0))
        npt.assert_allclose(s.to_array(), [1.0, np.pi / 2, 0.0], atol=1e-15)
    run_test("rect(0,1,0) → sph(1, π/2, 0)", t_y_axis)

    def t_z_axis():
        s = sph(Vector.rectangular(0, 0, 1))
        assert s.phi == 0.0
        npt.assert_allclose(s.to_array(), [1.0, 0.0, np.pi / 2], atol=1e-15)
    run_test("rect(0,0,1) → sph(1, 0, π/2)", t_z_axis)

    def t_diagonal():
        s = sph(Vector.rectangular(1, 1, 0))
        npt.assert_allclose(s.to_array(), [np.sqrt(2), np.pi / 4, 0.0], atol=1e-15)
    run_test("rect(1,1,0) → sph(√2, π/4, 0)", t_diagonal)

    def t_origin():
        s = sph(Vector.rectangular(0, 0, 0))
        assert s.to_array().tolist() == [0.0, 0.0, 0.0]
    run_test("origin → sph(0, 0, 0)", t_origin)

    def t_negative_azimuth_wrapped():
        s = sph(Vector.rectangular(0, -1, 0))
        npt.assert_allclose(s.phi, 1.5 * np.pi, rtol=1e-15)
    run_test("azimuth of −ŷ wrapped to 3π/2", t_negative_azimuth_wrapped)

    def t_sph_to_rect():
        v = convert(Vector.spherical(2.0, np.pi / 2, 0.0), VectorType.RECTANGULAR)
        assert v.type is VectorType.RECTANGULAR
        npt.assert_allclose(v.to_array(), [0.0, 2.0, 0.0], atol=1e-15)
        w = convert(Vector.spherical(3.0, 0.3, -np.pi / 2), "rectangular")
        npt.assert_allclose(w.to_array(), [0.0, 0.0, -3.0], atol=1e-15)
    run_test("sph → rect literal values", t_sph_to_rect)

    def t_roundtrip():
        for row in RANDOM_VECS:
            v = Vector.from_array(row)
            back = convert(sph(v), VectorType.RECTANGULAR)
            npt.assert_allclose(back.to_array(), row,
                                rtol=0, atol=1e-12 * np.linalg.norm(row))
    run_test("rect → sph → rect roundtrip", t_roundtrip)

    def t_spherical_ranges():
        for row in np.vstack([RANDOM_VECS, -RANDOM_VECS]):
            s = sph(Vector.from_array(row))
            assert s.r >= 0.0
            assert 0.0 <= s.phi < 2 * np.pi
            assert -np.pi / 2 <= s.theta <= np.pi / 2
    run_test("spherical invariants r≥0, φ∈[0,2π), θ∈[−π/2,π/2]", t_spherical_ranges)

    def t_same_type_copy():
        v = Vector.rectangular(1.0, 2.0, 3.0)
        w = convert(v, VectorType.RECTANGULAR)
        assert w == v and w is not v
        w[0] = 10.0
        assert v.x == 1.0
        s = Vector.spherical(1.0, 0.5, 0.25)
        assert convert(s, "spherical") == s
    run_test("same-representation convert is a copy", t_same_type_copy)

    def t_unsupported():
        v = Vector.rectangular(1, 2, 3)
        for bad in ("cylindrical", 42, None):
            try:
                convert(v, bad)
                assert False, "Should raise"
            except ValueError:
                pass
    run_test("unsupported representation → ValueError", t_unsupported)

    def t_dot_cross_norm():
        ex, ey = Vector.rectangular(1, 0, 0), Vector.rectangular(0, 1, 0)
        assert dot(ex, ey) == 0.0
        assert cross(ex, ey) == Vector.rectangular(0, 0, 1)
        assert normalize(Vector.rectangular(3, 4, 0)) == 5.0
        assert ex.cross(ey).z == 1.0 and ex.dot(ex) == 1.0
    run_test("dot / cross / normalize literals", t_dot_cross_norm)

    def t_normalize_zero():
        assert normalize(Vector.rectangular(0, 0, 0)) == 0.0
        assert abs(Vector.spherical(0, 1.0, 0.5)) == 0.0
    run_test("normalize zero vector = 0", t_normalize_zero)

    def t_normalize_spherical():
        npt.assert_allclose(Vector.spherical(7.0, 1.1, -0.4).normalize(), 7.0, rtol=1e-15)
    run_test("normalize spherical = r", t_normalize_spherical)

    def t_mixed_add():
        s = Vector.spherical(1.0, np.pi / 2, 0.0)
        out = s + Vector.rectangular(1.0, 0.0, 0.0)
        assert out.type is VectorType.RECTANGULAR
        npt.assert_allclose(out.to_array(), [1.0, 1.0, 0.0], atol=1e-15)
    run_test("spherical + rectangular → rectangular", t_mixed_add)

    def t_sub_neg():
        a, b = Vector.rectangular(1, 2, 3), Vector.rectangular(3, 2, 1)
        assert a - b == Vector.rectangular(-2, 0, 2)
        assert -a == Vector.rectangular(-1, -2, -3)
        assert (-Vector.spherical(1.0, 0.0, 0.0)).type is VectorType.RECTANGULAR
    run_test("subtraction and negation", t_sub_neg)

    def t_scalar():
        a = Vector.rectangular(1, -2, 4)
        assert a * 2.0 == Vector.rectangular(2, -4, 8)
        assert 2.0 * a == a * 2.0
        assert a / 2.0 == Vector.rectangular(0.5, -1.0, 2.0)
    run_test("scalar multiply / divide", t_scalar)

    def t_numpy_scalars():
        a = Vector.rectangular(1, -2, 4)
        assert a * np.array(2.0) == Vector.rectangular(2, -4, 8)
        assert np.array(2.0) * a == a * 2.0
        assert a * np.float32(0.5) == a / np.int64(2)
        assert a / np.array(4.0) == Vector.rectangular(0.25, -0.5, 1.0)
        b = a.copy()
        b *= np.array(3.0)
        assert b == Vector.rectangular(3, -6, 12)
        for bad in (np.array([1.0, 2.0]), "2", None, a):
            try:
                a * bad
                assert False, "Should raise"
            except TypeError:
                pass
    run_test("0-d arrays and NumPy scalars scale; others → TypeError", t_numpy_scalars)

    def t_divide_by_zero():
        q = Vector.rectangular(1.0, -1.0, 0.0) / 0.0
        assert q.x == np.inf and q.y == -np.inf and np.isnan(q.z)
    run_test("divide by zero → ±inf / nan, no exception", t_divide_by_zero)

    def t_not_implemented():
        try:
            Vector.rectangular(1, 2, 3) + 1.0
            assert False, "Should raise"
        except TypeError:
            pass
    run_test("vector + scalar → TypeError", t_not_implemented)

    def t_iadd_rebinds():
        a = Vector.spherical(1.0, 0.0, 0.0)
        alias = a
        b = Vector.rectangular(1.0, 0.0, 0.0)
        a += b
        assert alias is a
        assert a.type is VectorType.RECTANGULAR
        npt.assert_allclose(a.to_array(), [2.0, 0.0, 0.0], atol=1e-15)
        assert b == Vector.rectangular(1.0, 0.0, 0.0)
    run_test("+= rebinds receiver only", t_iadd_rebinds)

    def t_inplace_chain():
        a = Vector.rectangular(2.0, 4.0, 6.0)
        a -= Vector.rectangular(1.0, 1.0, 1.0)
        a *= 2.0
        a /= 4.0
        assert a == Vector.rectangular(0.5, 1.5, 2.5)
    run_test("-= *= /= in place", t_inplace_chain)

    def t_matmul():
        M = np.array([[0.0, -1.0, 0.0],
                      [1.0, 0.0, 0.0],
                      [0.0, 0.0, 1.0]])
        v = Vector.rectangular(1.0, 0.0, 0.0)
        npt.assert_allclose((M @ v).to_array(), [0.0, 1.0, 0.0], atol=1e-15)
        npt.assert_allclose((v @ M).to_array(), [0.0, -1.0, 0.0], atol=1e-15)
        v @= M
        npt.assert_allclose(v.to_array(), [0.0, -1.0, 0.0], atol=1e-15)
    run_test("matrix products M@v, v@M, @=", t_matmul)

    def t_matmul_bad_shape():
        try:
            Vector.rectangular(1, 2, 3) @ np.eye(2)
            assert False, "Should raise"
        except ValueError:
            pass
    run_test("v @ non-3×3 → ValueError", t_matmul_bad_shape)

    def t_indexing():
        v = Vector.rectangular(4.0, 5.0, 6.0)
        assert (v[0], v[1], v[2]) == (4.0, 5.0, 6.0)
        s = Vector.spherical(2.0, 0.0, 0.0)
        npt.assert_allclose(s[0], 2.0, rtol=1e-15)
    run_test("get(i) reads rectangular components", t_indexing)

    def t_index_out_of_range():
        v = Vector.rectangular(1, 2, 3)
        for bad in (3, -1, 1.0):
            try:
                v[bad]
                assert False, "Should raise"
            except IndexError:
                pass
        try:
            v[5] = 1.0
            assert False, "Should raise"
        except IndexError:
            pass
    run_test("index outside 0..2 → IndexError", t_index_out_of_range)

    def t_setitem_spherical():
        s = Vector.spherical(1.0, np.pi / 2, 0.0)
        s[2] = 3.0
        assert s.type is VectorType.RECTANGULAR
        npt.assert_allclose(s.to_array(), [0.0, 1.0, 3.0], atol=1e-15)
    run_test("set(i) on spherical projects to rectangular", t_setitem_spherical)

    def t_set_rebinds():
        v = Vector.rectangular(1, 2, 3)
        v.set(Vector.spherical(5.0, 0.1, 0.2))
        assert v.type is VectorType.SPHERICAL and v.r == 5.0
    run_test("set(vector) changes representation", t_set_rebinds)

    def t_unpack_and_copy():
        v = Vector.rectangular(7.0, 8.0, 9.0)
        x, y, z = v
        assert (x, y, z) == (7.0, 8.0, 9.0)
        arr = v.to_array()
        arr[0] = 0.0
        assert v.x == 7.0
        assert len(v) == 3
    run_test("unpacking and to_array copy", t_unpack_and_copy)

    def t_isclose_across_types():
        v = Vector.rectangular(1.0, 1.0, 1.0)
        assert v.isclose(sph(v))
        assert not v.isclose(Vector.rectangular(1.0, 1.0, 1.1))
        assert v != sph(v)
    run_test("isclose compares physical vectors", t_isclose_across_types)

    def t_repr():
        assert repr(Vector.rectangular(1.0, 2.0, 3.0)) == "Vector.rectangular(x=1.0, y=2.0, z=3.0)"
        assert repr(Vector.spherical(1.0, 0.0, 0.0)).startswith("Vector.spherical(r=1.0")
    run_test("repr", t_repr)

    _group_passed(before)


# ═══════════════════════════════════════════════════════════════════════════
#  3. FUNDAMENTAL MODULE
# ═══════════════════════════════════════════════════════════════════════════

def test_fundamental():
    print("\n── fundamental ──")
    before = _results["fail"]

    def t_shapes():
        assert delaunay_arguments(0.3).shape == (5,) == (len(DELAUNAY_NAMES),)
        assert planetary_arguments(0.3).shape == (14,) == (len(PLANETARY_NAMES),)
    run_test("argument set sizes 5 and 14", t_shapes)

    def t_delaunay_epoch():
        expected = np.array([485868.249036, 1287104.79305, 335779.526232,
                             1072260.70369, 450160.398036]) * ARCSEC_TO_RAD
        npt.assert_allclose(delaunay_arguments(0.0), expected, rtol=1e-15)
    run_test("Delaunay arguments at J2000.0", t_delaunay_epoch)

    def t_delaunay_rate():
        # mean anomaly of the Moon advances ~1717915923″ per century
        d = delaunay_arguments(1e-3) - delaunay_arguments(0.0)
        npt.assert_allclose(d[0], 1717915923.2178e-3 * ARCSEC_TO_RAD, rtol=1e-8)
        assert d[4] < 0.0       # node regresses
    run_test("Delaunay secular rates", t_delaunay_rate)

    def t_planetary_epoch():
        a = planetary_arguments(0.0)
        npt.assert_allclose(a[0], 2.35555598, rtol=1e-15)
        npt.assert_allclose(a[12], 5.321159000, rtol=1e-15)
        assert a[13] == 0.0
    run_test("planetary arguments at J2000.0", t_planetary_epoch)

    def t_general_precession():
        npt.assert_allclose(general_precession(1.0), 0.02438175 + 0.00000538691, rtol=1e-15)
        npt.assert_allclose(planetary_arguments(2.0)[13], general_precession(2.0), rtol=1e-15)
    run_test("general precession p_A", t_general_precession)

    def t_sets_agree():
        # the planetary set uses its own, slightly different, constants
        lunar = np.mod(delaunay_arguments(0.0), TWO_PI)
        npt.assert_allclose(lunar, planetary_arguments(0.0)[:5], rtol=0, atol=1e-6)
    run_test("planetary l..Ω agree with Delaunay at J2000.0", t_sets_agree)

    def t_pure():
        npt.assert_array_equal(delaunay_arguments(0.7), delaunay_arguments(0.7))
    run_test("arguments are pure functions of T", t_pure)

    _group_passed(before)


# ═══════════════════════════════════════════════════════════════════════════
#  4. SERIES MODULE
# ═══════════════════════════════════════════════════════════════════════════

def test_series():
    print("\n── series ──")
    before = _results["fail"]

    def t_table_sizes():
        assert len(LUNI_SOLAR) == 678 and LUNI_SOLAR.arity == 5
        assert len(PLANETARY) == 687 and PLANETARY.arity == 14
        assert LUNI_SOLAR.coefficients.shape == (678, 6)
        assert PLANETARY.coefficients.shape == (687, 4)
    run_test("IAU 2000A table sizes", t_table_sizes)

    def t_leading_terms():
        t0 = LUNI_SOLAR.term(0)
        assert t0.multipliers == (0, 0, 0, 0, 1)
        assert t0.coefficients == (-172064161.0, -174666.0, 33386.0,
                                   92052331.0, 9086.0, 15377.0)
        p0 = PLANETARY.term(0)
        assert p0.multipliers == (0, 0, 0, 0, 0, 0, 0, 8, -16, 4, 5, 0, 0, 0)
        assert p0.coefficients == (1440.0, 0.0, 0.0, 0.0)
    run_test("leading terms (18.6-yr node, Venus-Earth-Mars)", t_leading_terms)

    def t_last_terms():
        assert PLANETARY.term(686).coefficients == (3.0, 0.0, 0.0, -1.0)
        assert len(list(PLANETARY)) == 687
    run_test("last planetary term and iteration", t_last_terms)

    def t_read_only():
        try:
            LUNI_SOLAR.coefficients[0, 0] = 0.0
            assert False, "Should raise"
        except ValueError:
            pass
    run_test("tables are read-only", t_read_only)

    def t_arity_mismatch():
        try:
            evaluate_luni_solar(LUNI_SOLAR, np.zeros(14), 0.0)
            assert False, "Should raise"
        except ValueError:
            pass
        try:
            evaluate_planetary(LUNI_SOLAR, np.zeros(5))
            assert False, "Should raise"
        except ValueError:
            pass
    run_test("wrong arity / layout → ValueError", t_arity_mismatch)

    def t_bad_layout():
        try:
            HarmonicSeries("bad", np.zeros((2, 5)), np.zeros((2, 5)))
            assert False, "Should raise"
        except ValueError:
            pass
    run_test("coefficient width other than 6/4 → ValueError", t_bad_layout)

    def t_single_luni_solar_term():
        s = HarmonicSeries("one", [[1, 0, 0, 0, 0]], [[1.0, 2.0, 3.0, 4.0, 5.0, 6.0]])
        args = np.array([0.3, 9.0, 9.0, 9.0, 9.0])
        dp, de = evaluate_luni_solar(s, args, 0.5)
        npt.assert_allclose(dp, 2.0 * np.sin(0.3) + 3.0 * np.cos(0.3), rtol=1e-15)
        npt.assert_allclose(de, 6.5 * np.cos(0.3) + 6.0 * np.sin(0.3), rtol=1e-15)
    run_test("single luni-solar term by hand", t_single_luni_solar_term)

    def t_single_planetary_term():
        m = np.zeros((1, 14), dtype=int)
        m[0, 13] = 2
        s = HarmonicSeries("one", m, [[1.0, 2.0, 3.0, 4.0]])
        args = np.zeros(14)
        args[13] = 0.2
        dp, de = evaluate_planetary(s, args)
        npt.assert_allclose(dp, np.sin(0.4) + 2.0 * np.cos(0.4), rtol=1e-15)
        npt.assert_allclose(de, 3.0 * np.sin(0.4) + 4.0 * np.cos(0.4), rtol=1e-15)
        assert evaluate(s, args) == (dp, de)
    run_test("single planetary term by hand", t_single_planetary_term)

    def t_matches_descending_loop():
        T = 0.37
        args = delaunay_arguments(T)
        dp = de = 0.0
        for i in range(len(LUNI_SOLAR) - 1, -1, -1):
            term = LUNI_SOLAR.term(i)
            a = term.argument(args)
            c = term.coefficients
            dp += (c[0] + c[1] * T) * np.sin(a) + c[2] * np.cos(a)
            de += (c[3] + c[4] * T) * np.cos(a) + c[5] * np.sin(a)
        vdp, vde = evaluate(LUNI_SOLAR, args, T)
        # 1e-7″ units: agreement to ~1e-6 of a unit is far below 1 µas
        npt.assert_allclose(vdp, dp, rtol=0, atol=1e-3)
        npt.assert_allclose(vde, de, rtol=0, atol=1e-3)
    run_test("vectorized sum = term-by-term descending loop", t_matches_descending_loop)

    _group_passed(before)


# ═══════════════════════════════════════════════════════════════════════════
#  5. NUTATION MODULE
# ═══════════════════════════════════════════════════════════════════════════

def test_nutation():
    print("\n── nutation ──")
    before = _results["fail"]

    def t_sofa_00a():
        dpsi, deps = iau2000a_nutation(T_SOFA)
        npt.assert_allclose(dpsi, DPSI_00A, rtol=0, atol=1e-12)
        npt.assert_allclose(deps, DEPS_00A, rtol=0, atol=1e-12)
    run_test("IAU 2000A matches SOFA iauNut00a", t_sofa_00a)

    def t_sofa_06a():
        dpsi, deps = compute_nutation(T_SOFA)
        npt.assert_allclose(dpsi, DPSI_06A, rtol=0, atol=1e-12)
        npt.assert_allclose(deps, DEPS_06A, rtol=0, atol=1e-12)
    run_test("adjusted model matches SOFA iauNut06a", t_sofa_06a)

    def t_components_sum():
        ls, pl = luni_solar_nutation(0.2), planetary_nutation(0.2)
        full = iau2000a_nutation(0.2)
        npt.assert_allclose(full.dpsi, ls.dpsi + pl.dpsi, rtol=1e-15)
        npt.assert_allclose(full.deps, ls.deps + pl.deps, rtol=1e-15)
        assert abs(pl.dpsi) < arcsec_to_rad(0.01)
        assert abs(pl.deps) < arcsec_to_rad(0.01)
    run_test("luni-solar + planetary = IAU 2000A", t_components_sum)

    def t_adjustment_algebra():
        raw = NutationResult(1.234e-5, -4.321e-5)
        T = 0.7
        adj = precession_adjustment(raw, T)
        npt.assert_allclose(adj.dpsi, raw.dpsi * (1 + 4.697e-7 - 2.7774e-6 * T), rtol=1e-15)
        npt.assert_allclose(adj.deps, raw.deps * (1 - 2.7774e-6 * T), rtol=1e-15)
    run_test("Wallace & Capitaine adjustment", t_adjustment_algebra)

    def t_adjustment_applied():
        for T in (-2.0, 0.3, 1.5):
            expected = precession_adjustment(iau2000a_nutation(T), T)
            assert compute_nutation(T) == expected
    run_test("full path applies the adjustment", t_adjustment_applied)

    def t_select_fast():
        assert compute_nutation(0.5, fast=True) == fast_nutation(0.5)
        assert compute_nutation(-1.0, fast=True) == fast_nutation(-1.0)
        assert compute_nutation(1.0, fast=True) == fast_nutation(1.0)
    run_test("fast requested, |T| ≤ 1 → fast model", t_select_fast)

    def t_select_full():
        for T, fast in ((1.5, True), (-1.0000001, True), (0.5, False), (0.0, False)):
            assert compute_nutation(T, fast=fast) == \
                precession_adjustment(iau2000a_nutation(T), T)
    run_test("|T| > 1 or fast not requested → IAU 2000A", t_select_full)

    def t_use_fast_model():
        assert use_fast_model(0.5, True)
        assert use_fast_model(-1.0, True)
        assert not use_fast_model(1.5, True)
        assert not use_fast_model(0.5, False)
        assert FAST_MODEL_LIMIT == 1.0
    run_test("use_fast_model truth table", t_use_fast_model)

    def t_fast_literal():
        dpsi, deps = fast_nutation(0.06)
        npt.assert_allclose(dpsi, -4.837500861523583e-05, rtol=0, atol=1e-15)
        npt.assert_allclose(deps, -3.816128493167931e-05, rtol=0, atol=1e-15)
    run_test("fast model at T = 0.06", t_fast_literal)

    def t_fast_terms():
        for T in np.linspace(-1.0, 1.0, 41):
            dpsi, deps, _ = fast_reference(T)
            got = fast_nutation(T)
            npt.assert_allclose(got.dpsi, dpsi, rtol=0, atol=1e-15)
            npt.assert_allclose(got.deps, deps, rtol=0, atol=1e-15)
    run_test("fast model = 13-term table, |T| ≤ 1", t_fast_terms)

    def t_fast_n2():
        grid = np.linspace(-1.0, 1.0, 2001)
        sin_n2 = np.array([abs(np.sin(fast_reference(T)[2])) for T in grid])
        T = grid[np.argmax(sin_n2)]
        assert sin_n2.max() > 0.99
        dpsi, deps, _ = fast_reference(T)
        got = fast_nutation(T)
        npt.assert_allclose(got.dpsi, dpsi, rtol=0, atol=1e-15)
        npt.assert_allclose(got.deps, deps, rtol=0, atol=1e-15)
        # 0.2088″ sin N2 dominates the gap to the double-converted listing
        listing_dpsi = fast_reference(T, double_converted_n2=True)[0]
        assert abs(got.dpsi - listing_dpsi) > 5e-7
    run_test("fast model N2 = 2·N1 [rad] where its term peaks", t_fast_n2)

    def t_fast_bounds():
        for T in np.linspace(-1.0, 1.0, 21):
            dpsi, deps = fast_nutation(T)
            assert np.isfinite(dpsi) and np.isfinite(deps)
            assert abs(dpsi) < arcsec_to_rad(20.0)
            assert abs(deps) < arcsec_to_rad(11.0)
    run_test("fast model bounded by its term amplitudes", t_fast_bounds)

    def t_full_bounds():
        for T in T_SAMPLES:
            dpsi, deps = compute_nutation(T)
            assert abs(dpsi) < arcsec_to_rad(20.0)
            assert abs(deps) < arcsec_to_rad(11.0)
    run_test("IAU 2000A bounded (|Δψ|<20″, |Δε|<11″)", t_full_bounds)

    def t_nutation_jd():
        assert nutation_jd(JD_SOFA) == compute_nutation(T_SOFA)
        assert nutation_jd(JD_SOFA, fast=True) == compute_nutation(T_SOFA, fast=True)
    run_test("nutation_jd wraps compute_nutation", t_nutation_jd)

    def t_result_tuple():
        dpsi, deps = compute_nutation(0.1)
        r = compute_nutation(0.1)
        assert (r.dpsi, r.deps) == (dpsi, deps)
        assert isinstance(r.dpsi, float)
    run_test("NutationResult unpacks as (dpsi, deps)", t_result_tuple)

    _group_passed(before)


# ═══════════════════════════════════════════════════════════════════════════
#  6. OBLIQUITY MODULE
# ═══════════════════════════════════════════════════════════════════════════

def test_obliquity():
    print("\n── obliquity ──")
    before = _results["fail"]

    def t_epoch_value():
        npt.assert_allclose(mean_obliquity(0.0), 84381.406 * ARCSEC_TO_RAD, rtol=1e-15)
        assert np.deg2rad(23.0) < mean_obliquity(0.0) < np.deg2rad(24.0)
    run_test("ε_A(J2000) = 84381.406″", t_epoch_value)

    def t_decreasing():
        assert mean_obliquity(1.0) < mean_obliquity(0.0)
        npt.assert_allclose(rad_to_arcsec(mean_obliquity(0.0) - mean_obliquity(1.0)),
                            46.836769, atol=1e-2)
    run_test("obliquity decreases ~46.8″/century", t_decreasing)

    def t_true():
        T = 0.4
        npt.assert_allclose(true_obliquity(T), mean_obliquity(T) + compute_nutation(T).deps,
                            rtol=1e-15)
    run_test("true = mean + Δε", t_true)

    _group_passed(before)


# ═══════════════════════════════════════════════════════════════════════════
#  7. FRAMES MODULE
# ═══════════════════════════════════════════════════════════════════════════

def test_frames():
    print("\n── frames ──")
    before = _results["fail"]

    def t_identity():
        npt.assert_allclose(nutation_matrix(0.0, 0.0, 0.409), np.eye(3), atol=1e-15)
    run_test("zero nutation → identity", t_identity)

    def t_orthonormal():
        rng = np.random.default_rng(7)
        for dpsi, deps, eps in rng.uniform(-0.5, 0.5, size=(20, 3)):
            N = nutation_matrix(dpsi, deps, eps)
            npt.assert_allclose(N.T @ N, np.eye(3), atol=1e-14)
            npt.assert_allclose(np.linalg.det(N), 1.0, atol=1e-14)
    run_test("NᵀN = I, det N = 1", t_orthonormal)

    def t_matrix_elements():
        dpsi, deps, eps = 1e-4, -3e-5, 0.409
        N = nutation_matrix(dpsi, deps, eps)
        npt.assert_allclose(N[0, 1], -np.sin(dpsi) * np.cos(eps), rtol=1e-15)
        npt.assert_allclose(N[1, 0], np.sin(dpsi) * np.cos(eps + deps), rtol=1e-15)
        npt.assert_allclose(N[2, 0], np.sin(dpsi) * np.sin(eps + deps), rtol=1e-15)
    run_test("matrix elements xx..zz placement", t_matrix_elements)

    def t_small_angle():
        dpsi, deps = compute_nutation(T_SOFA)
        eps = mean_obliquity(T_SOFA)
        N = mean_to_true_matrix(T_SOFA)
        npt.assert_allclose(N[0, 1], -dpsi * np.cos(eps), rtol=1e-6)
        npt.assert_allclose(N[1, 2], -deps, rtol=1e-4)
    run_test("N ≈ I + small-angle terms", t_small_angle)

    def t_apply_roundtrip():
        for T in T_SAMPLES:
            for fast in (True, False):
                for row in RANDOM_VECS[:5]:
                    v = Vector.from_array(row)
                    fwd = apply_nutation(T, fast, v, True)
                    back = apply_nutation(T, fast, fwd, False)
                    npt.assert_allclose(back.to_array(), row, rtol=0,
                                        atol=1e-12 * np.linalg.norm(row))
    run_test("apply_nutation forward ∘ inverse = identity", t_apply_roundtrip)

    def t_apply_spherical_input():
        s = Vector.spherical(1.5, 2.0, 0.3)
        out = apply_nutation(0.2, False, s, True)
        assert out.type is VectorType.RECTANGULAR
        assert s.type is VectorType.SPHERICAL and s.r == 1.5
        npt.assert_allclose(out.normalize(), 1.5, rtol=1e-14)
        npt.assert_allclose(out.to_array(),
                            mean_to_true_matrix(0.2) @ s.to(VectorType.RECTANGULAR).to_array(),
                            rtol=1e-15)
    run_test("spherical input, new rectangular output", t_apply_spherical_input)

    def t_apply_input_untouched():
        v = Vector.rectangular(1.0, 2.0, 3.0)
        apply_nutation(0.5, True, v, True)
        assert v == Vector.rectangular(1.0, 2.0, 3.0)
    run_test("apply_nutation leaves input untouched", t_apply_input_untouched)

    def t_direction():
        v = Vector.rectangular(0.3, -0.2, 0.9)
        fwd = apply_nutation(0.1, False, v, True)
        inv = apply_nutation(0.1, False, v, False)
        npt.assert_allclose(fwd.to_array(), mean_to_true_matrix(0.1) @ v.to_array(), rtol=1e-15)
        npt.assert_allclose(inv.to_array(), mean_to_true_matrix(0.1).T @ v.to_array(), rtol=1e-15)
    run_test("mean_to_true flag picks N or Nᵀ", t_direction)

    def t_array_forms():
        true = mean_to_true(RANDOM_VECS, 0.3)
        assert true.shape == RANDOM_VECS.shape
        npt.assert_allclose(true_to_mean(true, 0.3), RANDOM_VECS, atol=1e-9)
        single = mean_to_true(RANDOM_VECS[0], 0.3)
        npt.assert_allclose(single, true[0], rtol=0, atol=1e-12)
        npt.assert_allclose(np.linalg.norm(true, axis=1),
                            np.linalg.norm(RANDOM_VECS, axis=1), rtol=1e-14)
    run_test("batch (N,3) transforms preserve norm", t_array_forms)

    def t_custom_obliquity():
        dpsi, deps = compute_nutation(0.5)
        N = mean_to_true_matrix(0.5, obliquity=lambda T: 0.0)
        npt.assert_allclose(N, nutation_matrix(dpsi, deps, 0.0), rtol=1e-15)
    run_test("obliquity provider is injectable", t_custom_obliquity)

    def t_state_roundtrip():
        r, v = RANDOM_VECS[1], RANDOM_VECS[2] * 1e-3
        r_t, v_t = state_mean_to_true(r, v, 0.8, fast=True)
        r_b, v_b = state_true_to_mean(r_t, v_t, 0.8, fast=True)
        npt.assert_allclose(r_b, r, atol=1e-10)
        npt.assert_allclose(v_b, v, atol=1e-13)
    run_test("state MEAN↔TRUE roundtrip", t_state_roundtrip)

    def t_get_dcm():
        npt.assert_allclose(get_dcm("mean", "mean", 0.2), np.eye(3))
        R = get_dcm("MEAN", "true", 0.2) @ get_dcm("true", "mean", 0.2)
        npt.assert_allclose(R, np.eye(3), atol=1e-15)
        npt.assert_allclose(transform(RANDOM_VECS[0], "mean", "true", 0.2),
                            mean_to_true(RANDOM_VECS[0], 0.2), rtol=1e-15)
        assert FRAMES == ("mean", "true")
    run_test("unified get_dcm / transform", t_get_dcm)

    def t_unknown_frame():
        try:
            get_dcm("mean", "ecliptic", 0.0)
            assert False, "Should raise"
        except ValueError:
            pass
    run_test("unknown frame → ValueError", t_unknown_frame)

    def t_vector_matrix_interop():
        v = Vector.spherical(2.0, 0.4, -0.1)
        N = mean_to_true_matrix(0.05)
        w = v.copy()
        w @= N.T           # row vector × Nᵀ = N × column vector
        assert w.isclose(apply_nutation(0.05, False, v, True))
    run_test("Vector @= Nᵀ equals apply_nutation", t_vector_matrix_interop)

    _group_passed(before)


# ═══════════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    print("=" * 60)
    print("  astroeq — Comprehensive Unit Test Suite")
    print("=" * 60)

    for group in (test_utils, test_vector, test_fundamental, test_series,
                  test_nutation, test_obliquity, test_frames):
        try:
            group()
        except AssertionError:
            pass

    total = _results["pass"] + _results["fail"]
    print("\n" + "=" * 60)
    print(f"  TOTAL:  {_results['pass']} passed,  {_results['fail']} failed  "
          f"({total} tests)")
    if _results["errors"]:
        print(f"  FAILED: {', '.join(_results['errors'])}")
    print("=" * 60)

    sys.exit(0 if _results["fail"] == 0 else 1)
