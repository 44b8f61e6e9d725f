import pytest

from models import (
    CourseTee,
    Hole,
    HoleScore,
    Round,
    RoundPlayer,
    ScoreEntry,
    Tee,
    Tour,
    TourPlayer,
    TourSnapshot,
)


def par_table(course_id="c1", tee=Tee.MEN, par=4, holes=18):
    """Par table with every hole the same par and stroke index == hole number."""
    return CourseTee(
        course_id=course_id,
        tee=tee,
        holes=[Hole(number=n, par=par, stroke_index=n) for n in range(1, holes + 1)],
    )


def card_entries(round_id, player_id, strokes):
    """Score entries from a list of raw values; None and "" leave the hole empty."""
    entries = []
    for number, raw in enumerate(strokes, start=1):
        score = HoleScore.from_raw(number, raw)
        if score.is_empty:
            continue
        entries.append(ScoreEntry(round_id=round_id, player_id=player_id, score=score))
    return entries


def build_snapshot(
    players,
    rounds,
    *,
    enabled=False,
    course_tees=None,
    groups=(),
    matches=(),
    best_m=2,
):
    """
    players: {player_id: starting handicap}
    rounds:  [{"id", "round_no", "course_id", "cards": {pid: strokes},
               "playing": [pid, ...], "handicaps": {pid: ph}}]

    Anyone with a card is playing unless ``playing`` says otherwise.
    """
    tour_players = [
        TourPlayer(player_id=pid, name=pid.upper(), starting_handicap=hcp)
        for pid, hcp in players.items()
    ]
    round_models, round_players, scores = [], [], []
    for entry in rounds:
        rid = entry["id"]
        round_models.append(Round(
            id=rid,
            tour_id="t1",
            course_id=entry.get("course_id", "c1"),
            round_no=entry.get("round_no"),
        ))
        cards = entry.get("cards", {})
        playing = set(entry.get("playing", cards.keys()))
        handicaps = entry.get("handicaps", {})
        for pid in players:
            if pid in playing or pid in handicaps:
                round_players.append(RoundPlayer(
                    round_id=rid,
                    player_id=pid,
                    playing=pid in playing,
                    playing_handicap=handicaps.get(pid),
                ))
        for pid, strokes in cards.items():
            scores.extend(card_entries(rid, pid, strokes))

    return TourSnapshot(
        tour=Tour(id="t1", name="Spring Tour", rehandicapping_enabled=enabled, default_team_best_m=best_m),
        rounds=round_models,
        players=tour_players,
        round_players=round_players,
        course_tees=course_tees if course_tees is not None else [par_table()],
        scores=scores,
        groups=list(groups),
        matches=list(matches),
    )


@pytest.fixture
def make_snapshot():
    return build_snapshot
