from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from threading import RLock
from typing import Dict, List, Optional, Set
from uuid import uuid4

from . import golf_calc
from .schemas import Course, HoleRow, HoleScore, PlayerCard, PlayerUpdate, Scorecard

logger = logging.getLogger(__name__)

MAX_PLAYERS = 4
TENS_CAPACITY = 10


class InvalidReference(Exception):
    pass


class PlayerNotFound(InvalidReference):
    pass


class HoleNotFound(InvalidReference):
    pass


class CourseNotSelected(Exception):
    pass


@dataclass
class Player:
    id: str
    name: str = ""
    handicap: int = 0
    ledger: Dict[int, HoleScore] = field(default_factory=dict)
    selected_tens: Set[int] = field(default_factory=set)


def _new_player() -> Player:
    return Player(id=uuid4().hex)


class Roster:
    """Sesión de tarjeta: campo elegido, hasta 4 jugadores y el juego de los 10."""

    def __init__(self, course: Optional[Course] = None, play_tens: bool = False):
        self.course = course
        self.play_tens = play_tens
        self._players: List[Player] = [_new_player()]
        # los endpoints síncronos corren en paralelo en el threadpool
        self._lock = RLock()

    @property
    def players(self) -> List[Player]:
        with self._lock:
            return list(self._players)

    def __len__(self) -> int:
        with self._lock:
            return len(self._players)

    # -------------------------------- Jugadores ---------------------------------

    def get_player(self, player_id: str) -> Optional[Player]:
        with self._lock:
            for p in self._players:
                if p.id == player_id:
                    return p
            return None

    def _require_player(self, player_id: str) -> Player:
        p = self.get_player(player_id)
        if p is None:
            raise PlayerNotFound(player_id)
        return p

    def add_player(self) -> Optional[Player]:
        with self._lock:
            if len(self._players) >= MAX_PLAYERS:
                logger.info("roster full (%d players), add ignored", MAX_PLAYERS)
                return None
            p = _new_player()
            self._players.append(p)
            return p

    def update_player(self, player_id: str, data: PlayerUpdate) -> Optional[Player]:
        with self._lock:
            p = self.get_player(player_id)
            if not p:
                return None
            for k, v in data.model_dump(exclude_unset=True).items():
                if v is not None:
                    setattr(p, k, v)
            return p

    def remove_player(self, player_id: str) -> bool:
        with self._lock:
            p = self._require_player(player_id)
            if len(self._players) == 1:
                logger.info("cannot remove the last player %s", player_id)
                return False
            self._players.remove(p)
            return True

    # ---------------------------------- Campo -----------------------------------

    def set_course(self, course: Course) -> None:
        with self._lock:
            if self.course is not None and self.course.id == course.id:
                self._prune_cards(course)
            else:
                # las tarjetas de otro campo no valen: se vacían
                if self.course is not None:
                    logger.info("course changed %s -> %s, clearing cards", self.course.id, course.id)
                for p in self._players:
                    p.ledger.clear()
                    p.selected_tens.clear()
            self.course = course

    def _prune_cards(self, course: Course) -> None:
        # mismo campo, pero los hoyos pueden haber cambiado en el catálogo
        numbers = {h.number for h in course.holes}
        for p in self._players:
            for n in [n for n in p.ledger if n not in numbers]:
                del p.ledger[n]
            stale = p.selected_tens - numbers
            if stale:
                logger.info("player %s: dropping 10s holes %s not in course %s", p.id, sorted(stale), course.id)
                p.selected_tens -= stale

    def set_play_tens(self, enabled: bool) -> None:
        with self._lock:
            self.play_tens = enabled

    def _require_course(self) -> Course:
        if self.course is None:
            raise CourseNotSelected()
        return self.course

    def _require_hole(self, course: Course, hole_number: int):
        hole = course.hole(hole_number)
        if hole is None:
            raise HoleNotFound(hole_number)
        return hole

    # ---------------------------------- Tarjeta ---------------------------------

    def record_gross(self, player_id: str, hole_number: int, gross: int) -> HoleScore:
        with self._lock:
            course = self._require_course()
            p = self._require_player(player_id)
            hole = self._require_hole(course, hole_number)
            if gross < 0:
                raise ValueError("gross strokes must be non-negative")

            entry = golf_calc.score_hole(gross, p.handicap, hole, course.hole_count)
            p.ledger[hole_number] = entry
            return entry

    def toggle_ten(self, player_id: str, hole_number: int) -> Set[int]:
        with self._lock:
            course = self._require_course()
            p = self._require_player(player_id)

            # quitar siempre se puede
            if hole_number in p.selected_tens:
                p.selected_tens.remove(hole_number)
                return set(p.selected_tens)

            self._require_hole(course, hole_number)
            if len(p.selected_tens) < TENS_CAPACITY:
                p.selected_tens.add(hole_number)
            else:
                logger.info("player %s already has %d holes for 10s", player_id, TENS_CAPACITY)
            return set(p.selected_tens)

    # ---------------------------------- Lectura ---------------------------------

    def player_card(self, player_id: str) -> PlayerCard:
        with self._lock:
            p = self._require_player(player_id)
            card = PlayerCard(id=p.id, name=p.name, handicap=p.handicap)
            if self.course is None:
                return card

            course = self.course
            received = golf_calc.strokes_received_per_hole(p.handicap, course.holes)
            rows = []
            for h in course.holes:
                entry = p.ledger.get(h.number)
                rows.append(HoleRow(
                    number=h.number,
                    par=h.par,
                    rank=h.rank,
                    strokes=received[h.number],
                    gross=entry.gross if entry else None,
                    net=entry.net if entry else None,
                    ten=h.number in p.selected_tens,
                ))
            card.holes = rows

            totals = golf_calc.section_totals(p.handicap, p.ledger, course)
            card.front = totals["front"]
            card.back = totals["back"]
            card.total = totals["total"]
            if self.play_tens:
                card.tens = golf_calc.side_game_summary(
                    p.ledger, p.selected_tens, course, TENS_CAPACITY
                )
            return card

    def scorecard(self) -> Scorecard:
        with self._lock:
            return Scorecard(
                course=self.course,
                play_tens=self.play_tens,
                max_players=MAX_PLAYERS,
                players=[self.player_card(p.id) for p in self._players],
            )


@lru_cache(maxsize=1)
def get_roster() -> Roster:
    return Roster()
