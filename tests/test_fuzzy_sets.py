import numpy as np
import pytest

from fuzzy_infer.fuzzy_sets import FuzzySet, domain_points, ramp, triangular


def tri(center, half_width):
    return lambda x: max(0.0, 1.0 - abs(x - center) / half_width)


@pytest.fixture
def low():
    return FuzzySet("Low", ramp(6, 2))


@pytest.fixture
def high():
    return FuzzySet("High", ramp(4, 8))


SAMPLES = [0.0, 1.5, 3.0, 4.0, 5.0, 5.5, 7.25, 10.0]


def test_domain_points_includes_both_ends():
    xs = domain_points(0, 10, 0.1)
    assert len(xs) == 101
    assert xs[0] == 0
    assert xs[-1] == pytest.approx(10)


def test_domain_points_keeps_last_point_of_decimal_span():
    # 0.3 / 0.1 is 2.9999999999999996 in binary floating point
    assert len(domain_points(0, 0.3, 0.1)) == 4


def test_domain_points_never_pass_x_max():
    xs = domain_points(0, 0.3, 0.1)
    assert xs[-1] == 0.3

    # (x_max - x_min) / step is 2.9999999996, counted as 3 steps
    x_max = 2.9999999996 * 0.5
    xs = domain_points(0, x_max, 0.5)
    assert len(xs) == 4
    assert xs.max() <= x_max
    assert xs[-1] == x_max


def test_domain_points_partial_last_step_excluded():
    xs = domain_points(0, 1, 0.3)
    assert xs == pytest.approx([0.0, 0.3, 0.6, 0.9])


def test_domain_points_empty_when_reversed():
    assert domain_points(5, 1, 0.5).size == 0


def test_domain_points_single_point():
    assert domain_points(2, 2, 0.5).tolist() == [2.0]


@pytest.mark.parametrize("step", [0, -0.1, float("nan"), float("inf")])
def test_domain_points_rejects_bad_step(step):
    with pytest.raises(ValueError):
        domain_points(0, 1, step)


def test_membership_degree_and_call(high):
    assert high.membership_degree(6) == pytest.approx(0.5)
    assert high(6) == high.membership_degree(6)


def test_union_is_pointwise_max(low, high):
    union = low.union(high)
    assert union.name == "Union(Low, High)"
    for x in SAMPLES:
        assert union.membership_degree(x) == max(low.membership_degree(x), high.membership_degree(x))


def test_intersection_is_pointwise_min(low, high):
    intersection = low.intersection(high)
    assert intersection.name == "Intersection(Low, High)"
    for x in SAMPLES:
        assert intersection.membership_degree(x) == min(low.membership_degree(x), high.membership_degree(x))


@pytest.mark.parametrize("combine, name", [
    (FuzzySet.union, "union"),
    (FuzzySet.intersection, "intersection"),
])
def test_nan_membership_propagates_through_set_algebra(combine, name):
    half = FuzzySet("Half", lambda x: 0.5)
    undefined = FuzzySet("Undefined", lambda x: float("nan"))
    assert np.isnan(combine(half, undefined)(0)), name
    assert np.isnan(combine(undefined, half)(0)), name


def test_complement(high):
    complement = high.complement()
    assert complement.name == "Complement(High)"
    for x in SAMPLES:
        assert complement.membership_degree(x) == 1 - high.membership_degree(x)


def test_operators_match_methods(low, high):
    for x in SAMPLES:
        assert (low | high)(x) == low.union(high)(x)
        assert (low & high)(x) == low.intersection(high)(x)
        assert (~high)(x) == high.complement()(x)


def test_combinators_leave_operands_untouched(low, high):
    before = [low(x) for x in SAMPLES]
    low.union(high).complement().normalize()
    assert [low(x) for x in SAMPLES] == before
    assert low.name == "Low"


def test_normalize_only_clamps_values_above_one():
    tall = FuzzySet("Tall", lambda x: x)
    normalized = tall.normalize()
    assert normalized.name == "Normalized(Tall)"
    assert normalized(2.0) == 1.0
    assert normalized(1.0) == 1.0
    # values below 1 are not rescaled to the peak of the set
    assert normalized(0.4) == 0.4
    assert normalized(0.0) == 0.0


def test_centroid_of_symmetric_triangle():
    fs = FuzzySet("Mid", tri(5, 2))
    assert fs.centroid(0, 10, 0.1) == pytest.approx(5, abs=1e-6)


def test_centroid_of_simpful_triangle():
    fs = triangular("Mid", 3, 5, 7)
    assert fs.centroid(0, 10, 0.1) == pytest.approx(5, abs=1e-6)


def test_centroid_of_asymmetric_shape():
    # mu(x) = x on [0, 4]: sum(x^2) / sum(x) over 0, 1, 2, 3, 4
    fs = FuzzySet("Rising", lambda x: x)
    assert fs.centroid(0, 4, 1) == pytest.approx(30 / 10)


def test_centroid_without_mass_is_zero():
    fs = FuzzySet("Empty", lambda x: 0.0)
    assert fs.centroid(0, 10, 0.5) == 0.0


def test_centroid_is_repeatable():
    fs = FuzzySet("Mid", tri(4.3, 1.7))
    assert fs.centroid(0, 10, 0.01) == fs.centroid(0, 10, 0.01)


def test_sample_aligned_with_points(high):
    xs = np.array([4.0, 6.0, 8.0])
    assert high.sample(xs).tolist() == [0.0, 0.5, 1.0]


def test_ramp_ascending_and_descending():
    up = ramp(3, 7)
    down = ramp(7, 3)
    assert [up(x) for x in (0, 3, 5, 7, 9)] == [0.0, 0.0, 0.5, 1.0, 1.0]
    assert [down(x) for x in (0, 3, 5, 7, 9)] == [1.0, 1.0, 0.5, 0.0, 0.0]


def test_ramp_needs_distinct_points():
    with pytest.raises(ValueError):
        ramp(2, 2)
