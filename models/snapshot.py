"""Fully materialized view of one tour, as handed to the scoring core.

The data-access layer gathers every dependent row set (rounds, pars,
scores, participation, players) before building a snapshot; the core never
fetches anything itself.
"""

from pydantic import Field, PrivateAttr
from typing import Dict, List, Optional, Tuple

from .base import BaseTourModel
from .group import Group
from .hole import CourseTee, Tee
from .hole_score import HoleScore
from .match import Match
from .player import TourPlayer
from .round import Round, order_rounds
from .round_player import Participation, RoundPlayer
from .tour import Tour

HOLES = range(1, 19)


class ScoreEntry(BaseTourModel):
    """A stored hole score for one (round, player)."""
    round_id: str
    player_id: str
    score: HoleScore


class TourSnapshot(BaseTourModel):
    tour: Tour
    rounds: List[Round] = Field(default_factory=list)
    players: List[TourPlayer] = Field(default_factory=list)
    round_players: List[RoundPlayer] = Field(default_factory=list)
    course_tees: List[CourseTee] = Field(default_factory=list)
    scores: List[ScoreEntry] = Field(default_factory=list)
    groups: List[Group] = Field(default_factory=list)
    matches: List[Match] = Field(default_factory=list)

    _round_players: Dict[Tuple[str, str], RoundPlayer] = PrivateAttr(default_factory=dict)
    _pars: Dict[Tuple[str, Tee], CourseTee] = PrivateAttr(default_factory=dict)
    _cards: Dict[Tuple[str, str], Dict[int, HoleScore]] = PrivateAttr(default_factory=dict)
    _players: Dict[str, TourPlayer] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        self.rounds = order_rounds(self.rounds)
        self.reindex()

    def reindex(self) -> None:
        """Rebuild lookup tables. Call after mutating the row lists."""
        self._round_players = {rp.key: rp for rp in self.round_players}
        self._pars = {(ct.course_id, ct.tee): ct for ct in self.course_tees}
        self._players = {p.player_id: p for p in self.players}
        cards: Dict[Tuple[str, str], Dict[int, HoleScore]] = {}
        for entry in self.scores:
            cards.setdefault((entry.round_id, entry.player_id), {})[entry.score.hole_number] = entry.score
        self._cards = cards

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_round(self, round_id: str) -> Optional[Round]:
        for r in self.rounds:
            if r.id == round_id:
                return r
        return None

    def get_player(self, player_id: str) -> Optional[TourPlayer]:
        return self._players.get(player_id)

    def round_player(self, round_id: str, player_id: str) -> Optional[RoundPlayer]:
        return self._round_players.get((round_id, player_id))

    def is_playing(self, round_id: str, player_id: str) -> bool:
        rp = self.round_player(round_id, player_id)
        return rp is not None and rp.playing

    def playing_players(self, round_id: str) -> List[TourPlayer]:
        return [p for p in self.players if self.is_playing(round_id, p.player_id)]

    def stored_handicap(self, round_id: str, player_id: str) -> Optional[int]:
        rp = self.round_player(round_id, player_id)
        return rp.playing_handicap if rp else None

    def tee_for(self, round_id: str, player_id: str) -> Tee:
        """Participation row tee, else the player's gender, else men's."""
        rp = self.round_player(round_id, player_id)
        if rp is not None and rp.tee is not None:
            return rp.tee
        player = self.get_player(player_id)
        return player.default_tee if player else Tee.MEN

    def par_table(self, round_: Round, player_id: str) -> Optional[CourseTee]:
        """Par table for the player's tee, falling back to the men's table."""
        if not round_.course_id:
            return None
        tee = self.tee_for(round_.id, player_id)
        return self._pars.get((round_.course_id, tee)) or self._pars.get((round_.course_id, Tee.MEN))

    def hole_score(self, round_id: str, player_id: str, hole_number: int) -> HoleScore:
        card = self._cards.get((round_id, player_id), {})
        return card.get(hole_number) or HoleScore(hole_number=hole_number)

    def card(self, round_id: str, player_id: str) -> List[HoleScore]:
        """All 18 holes in order; missing holes come back empty."""
        return [self.hole_score(round_id, player_id, h) for h in HOLES]

    def holes_filled(self, round_id: str, player_id: str) -> int:
        return sum(1 for s in self.card(round_id, player_id) if s.is_entered)

    def participation(self, round_id: str, player_id: str) -> Participation:
        rp = self.round_player(round_id, player_id)
        if rp is None:
            return Participation.UNKNOWN
        if not rp.playing:
            return Participation.NOT_PLAYING
        if self.holes_filled(round_id, player_id) == 18:
            return Participation.PLAYING_COMPLETE
        return Participation.PLAYING_INCOMPLETE
