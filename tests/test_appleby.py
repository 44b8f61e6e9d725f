from decimal import Decimal

from models import Round
from scoring.appleby import (
    adjustment_rounds,
    appleby_participation_rows,
    apply_step,
    compute_appleby,
    cutoff_score,
    is_adjustment_round,
    segment_handicap,
)
from conftest import build_snapshot


# ================================================================
# Building blocks
# ================================================================

def test_adjustment_rounds_follow_the_cycle():
    assert [n for n in range(1, 13) if is_adjustment_round(n)] == [3, 6, 9, 12]
    assert not is_adjustment_round(None)
    assert not is_adjustment_round(0)


def test_cutoff_is_sixth_best():
    assert cutoff_score([40, 38, 36, 35, 34, 33, 30]) == 33
    assert cutoff_score([40, 40, 40, 40, 40, 40]) == 40
    assert cutoff_score([40, 38, 36, 35, 34]) is None


def test_apply_step():
    assert apply_step(Decimal("0.0"), 20, 25) == (Decimal("-0.5"), False, Decimal("-0.5"))
    assert apply_step(Decimal("0.0"), 25, 20) == (Decimal("0.5"), False, Decimal("0.5"))


def test_apply_step_caps_cumulative():
    applied, capped, cumulative = apply_step(Decimal("3.5"), 30, 20)
    assert (applied, capped, cumulative) == (Decimal("0.5"), True, Decimal("4.0"))

    applied, capped, cumulative = apply_step(Decimal("-1.8"), 20, 25)
    assert (applied, capped, cumulative) == (Decimal("-0.2"), True, Decimal("-2.0"))


# ================================================================
# Full preview
# ================================================================

def _tour(field_size=6):
    players = {f"p{i}": 0 for i in range(1, field_size)}
    players[f"p{field_size}"] = 10.0
    cards = {f"p{k + 1}": [3] * k + [4] * (18 - k) for k in range(field_size - 1)}
    cards[f"p{field_size}"] = [3] * 18
    rounds = [
        {"id": "r1", "round_no": 1},
        {"id": "r2", "round_no": 2},
        {"id": "r3", "round_no": 3, "cards": cards, "handicaps": {p: 0 for p in players}},
        {"id": "r4", "round_no": 4},
    ]
    return build_snapshot(players, rounds)


def test_compute_appleby():
    preview = compute_appleby(_tour())
    assert preview.can_update
    assert preview.cannot_update_reason is None
    assert preview.adjustment_rounds == [3]
    assert preview.cutoffs == {3: 36}
    assert [p.name for p in preview.players] == ["P1", "P2", "P3", "P4", "P5", "P6"]

    low = preview.players[0].step_for(3)
    assert low.score == 36
    assert low.is_cutoff_score
    assert low.step == Decimal("0.0")

    best = preview.players[5]
    step = best.step_for(3)
    assert step.score == 54
    assert step.step == Decimal("-1.8")
    assert step.cumulative == Decimal("-1.8")
    assert step.start_plus == Decimal("8.2")
    assert step.start_plus_rounded == 8
    assert best.step_for(6) is None


def test_segment_handicaps():
    preview = compute_appleby(_tour())
    best = preview.players[5]
    assert best.seed == 10
    assert segment_handicap(best, 1) == 10
    assert segment_handicap(best, 3) == 10
    assert segment_handicap(best, 4) == 8

    # a negative start+cumulative never plays below scratch
    assert segment_handicap(preview.players[4], 4) == 0


def test_small_field_cannot_update():
    preview = compute_appleby(_tour(field_size=5))
    assert preview.cutoffs == {3: None}
    assert not preview.can_update
    assert "at least 6" in preview.cannot_update_reason
    assert all(p.step_for(3).step is None for p in preview.players)


def test_no_adjustment_round_yet():
    snap = build_snapshot({"a": 5}, [{"id": "r1", "round_no": 1}])
    preview = compute_appleby(snap)
    assert not preview.can_update
    assert preview.cannot_update_reason == "No adjustment rounds found yet for this tour."


def test_duplicate_round_numbers_use_first_in_order():
    snap = build_snapshot({"a": 5}, [])
    snap.rounds = [Round(id="x", round_no=3), Round(id="y", round_no=3)]
    assert adjustment_rounds(snap)[3].id == "x"


def test_appleby_participation_rows():
    snap = _tour()
    preview = compute_appleby(snap)
    rows = appleby_participation_rows(snap, preview)
    assert len(rows) == 24
    by_key = {(r.round_id, r.player_id): r for r in rows}
    assert by_key[("r4", "p6")].playing_handicap == 8
    assert by_key[("r3", "p6")].playing_handicap == 10
    assert by_key[("r3", "p6")].playing is True
    assert by_key[("r1", "p6")].playing is False


def test_appleby_is_repeatable():
    snap = _tour()
    first = compute_appleby(snap)
    second = compute_appleby(snap)
    assert first == second
    assert appleby_participation_rows(snap, first) == appleby_participation_rows(snap, second)
