import pytest
from decimal import Decimal
from fractions import Fraction

from models import HoleScore
from scoring.rounding import clamp, round_half_up, to_tenths
from scoring.stableford import (
    MAX_POINTS,
    net_stableford_points,
    normalize_handicap,
    stableford_points,
    strokes_received,
)


# ================================================================
# Rounding
# ================================================================

@pytest.mark.parametrize("value, expected", [
    (2.5, 3),
    (-2.5, -3),
    (2.4999, 2),
    (Fraction(35, 3), 12),
    (Decimal("7.5"), 8),
    (0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_to_tenths():
    assert to_tenths(Decimal("0.25")) == Decimal("0.3")
    assert to_tenths(-0.25) == Decimal("-0.3")
    assert to_tenths(Fraction(1, 3)) == Decimal("0.3")
    assert to_tenths(4) == Decimal("4.0")


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


# ================================================================
# Strokes received
# ================================================================

@pytest.mark.parametrize("ph, si, expected", [
    (0, 1, 0),
    (18, 1, 1),
    (18, 18, 1),
    (20, 2, 2),
    (20, 3, 1),
    (36, 18, 2),
    (40, 2, 3),
    (9, 10, 0),
    (-5, 1, 0),
])
def test_strokes_received(ph, si, expected):
    assert strokes_received(ph, si) == expected


def test_normalize_handicap_garbage():
    assert normalize_handicap("abc") == 0
    assert normalize_handicap(None) == 0
    assert normalize_handicap(float("nan")) == 0
    assert normalize_handicap(float("inf")) == 0
    assert normalize_handicap(12.9) == 12
    assert normalize_handicap("7") == 7


def test_invalid_stroke_index_gets_only_full_rounds():
    assert strokes_received(20, "x") == 1
    assert strokes_received(20, 0) == 1


# ================================================================
# Points
# ================================================================

def test_stableford_points_bounds():
    assert stableford_points(4, 4) == 2
    assert stableford_points(3, 4) == 3
    assert stableford_points(9, 4) == 0
    assert stableford_points(-20, 4) == MAX_POINTS


@pytest.mark.parametrize("raw, par, si, ph, expected", [
    (4, 4, 1, 18, 3),
    ("4", 4, 1, 0, 2),
    (5, 4, 1, 0, 1),
    (1, 5, 1, 36, 8),
    (1, 6, 1, 72, 10),
    (9, 4, 1, 0, 0),
    ("P", 4, 1, 18, 0),
    ("", 4, 1, 18, 0),
    (None, 4, 1, 18, 0),
    ("abc", 4, 1, 18, 0),
    (4, 0, 1, 18, 0),
    (4, "bad", 1, 18, 0),
])
def test_net_stableford_points(raw, par, si, ph, expected):
    assert net_stableford_points(raw, par, si, ph) == expected


def test_net_stableford_points_accepts_hole_score():
    assert net_stableford_points(HoleScore(hole_number=1, strokes=3), 4, 1, 0) == 3
    assert net_stableford_points(HoleScore(hole_number=1, pickup=True), 4, 1, 0) == 0
    assert net_stableford_points(HoleScore(hole_number=1), 4, 1, 0) == 0


def test_net_stableford_points_never_negative_handicap():
    assert net_stableford_points(4, 4, 1, -10) == 2


@pytest.mark.parametrize("si", range(1, 19))
def test_extra_eighteen_handicap_adds_exactly_one_stroke(si):
    for hcp in range(0, 55):
        assert strokes_received(hcp + 18, si) == strokes_received(hcp, si) + 1


def test_points_stay_in_range_for_every_hole_setup():
    for par in (3, 4, 5):
        for si in range(1, 19):
            for hcp in (0, 9, 18, 27, 36, 54):
                for strokes in (1, 2, par, par + 3, 12):
                    assert 0 <= net_stableford_points(strokes, par, si, hcp) <= MAX_POINTS
                assert net_stableford_points("P", par, si, hcp) == 0
