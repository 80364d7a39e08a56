from __future__ import annotations

import logging
import threading
import time

import pytest

import app.roster as roster_module
from app.roster import (
    MAX_PLAYERS,
    TENS_CAPACITY,
    CourseNotSelected,
    HoleNotFound,
    InvalidReference,
    PlayerNotFound,
    Roster,
)
from app.schemas import HoleScore, PlayerUpdate


def _first(roster: Roster):
    return roster.players[0]


def test_new_roster_starts_with_one_blank_player():
    roster = Roster()
    assert len(roster) == 1
    p = _first(roster)
    assert p.name == ""
    assert p.handicap == 0
    assert p.ledger == {}
    assert p.selected_tens == set()


def test_add_player_stops_at_four(roster, caplog):
    for _ in range(MAX_PLAYERS - 1):
        assert roster.add_player() is not None
    ids = [p.id for p in roster.players]

    with caplog.at_level(logging.INFO, logger="app.roster"):
        assert roster.add_player() is None
    assert len(roster) == MAX_PLAYERS
    assert [p.id for p in roster.players] == ids
    assert "roster full" in caplog.text


def test_player_ids_are_unique(roster):
    roster.add_player()
    roster.add_player()
    ids = {p.id for p in roster.players}
    assert len(ids) == 3


def test_update_player_merges_patch(roster):
    pid = _first(roster).id
    roster.update_player(pid, PlayerUpdate(name="Seve"))
    roster.update_player(pid, PlayerUpdate(handicap=12))
    p = roster.get_player(pid)
    assert p.name == "Seve"
    assert p.handicap == 12


def test_update_unknown_player_is_ignored(roster):
    assert roster.update_player("nope", PlayerUpdate(name="x")) is None
    assert _first(roster).name == ""


def test_remove_player(roster):
    extra = roster.add_player()
    assert roster.remove_player(extra.id) is True
    assert len(roster) == 1
    with pytest.raises(PlayerNotFound):
        roster.remove_player(extra.id)


def test_last_player_is_never_removed(roster):
    assert roster.remove_player(_first(roster).id) is False
    assert len(roster) == 1


def test_record_gross_hardest_hole(roster):
    pid = _first(roster).id
    roster.update_player(pid, PlayerUpdate(handicap=20))
    entry = roster.record_gross(pid, 1, 6)
    assert entry == HoleScore(gross=6, net=4)
    assert roster.get_player(pid).ledger[1] == entry


def test_record_gross_base_stroke_only(roster):
    pid = _first(roster).id
    roster.update_player(pid, PlayerUpdate(handicap=20))
    assert roster.record_gross(pid, 15, 5) == HoleScore(gross=5, net=4)


def test_record_gross_is_idempotent_and_overwrites(roster):
    pid = _first(roster).id
    roster.update_player(pid, PlayerUpdate(handicap=9))
    first = roster.record_gross(pid, 2, 5)
    assert roster.record_gross(pid, 2, 5) == first
    roster.record_gross(pid, 2, 7)
    assert roster.get_player(pid).ledger == {2: HoleScore(gross=7, net=6)}


def test_zero_gross_is_a_recorded_score(roster):
    pid = _first(roster).id
    roster.record_gross(pid, 3, 0)
    assert roster.get_player(pid).ledger[3] == HoleScore(gross=0, net=0)
    row = roster.player_card(pid).holes[2]
    assert row.gross == 0
    assert roster.player_card(pid).holes[3].gross is None


def test_handicap_change_is_not_retroactive(roster):
    pid = _first(roster).id
    roster.update_player(pid, PlayerUpdate(handicap=18))
    roster.record_gross(pid, 1, 5)
    roster.record_gross(pid, 2, 5)

    roster.update_player(pid, PlayerUpdate(handicap=0))
    ledger = roster.get_player(pid).ledger
    assert ledger[1].net == 4
    assert ledger[2].net == 4

    # los golpes recibidos sí siguen el hándicap actual
    card = roster.player_card(pid)
    assert card.total.strokes == 0
    assert card.total.net == 8

    # al volver a apuntar el hoyo se recalcula
    roster.record_gross(pid, 1, 5)
    assert roster.get_player(pid).ledger[1].net == 5
    assert roster.get_player(pid).ledger[2].net == 4


def test_invalid_references(roster):
    pid = _first(roster).id
    with pytest.raises(HoleNotFound):
        roster.record_gross(pid, 19, 4)
    with pytest.raises(PlayerNotFound):
        roster.record_gross("ghost", 1, 4)
    with pytest.raises(InvalidReference):
        roster.toggle_ten(pid, 0)
    with pytest.raises(InvalidReference):
        roster.player_card("ghost")
    assert roster.get_player(pid).ledger == {}


def test_negative_gross_rejected(roster):
    with pytest.raises(ValueError):
        roster.record_gross(_first(roster).id, 1, -1)


def test_record_without_course():
    roster = Roster()
    pid = _first(roster).id
    with pytest.raises(CourseNotSelected):
        roster.record_gross(pid, 1, 4)
    with pytest.raises(CourseNotSelected):
        roster.toggle_ten(pid, 1)


def test_toggle_ten_capacity(roster):
    pid = _first(roster).id
    for hole in range(1, TENS_CAPACITY + 1):
        roster.toggle_ten(pid, hole)
    assert len(roster.get_player(pid).selected_tens) == TENS_CAPACITY

    # el 11º se ignora
    selected = roster.toggle_ten(pid, 11)
    assert selected == set(range(1, 11))

    # quitar siempre se puede, incluso lleno
    selected = roster.toggle_ten(pid, 4)
    assert 4 not in selected
    assert len(selected) == TENS_CAPACITY - 1

    selected = roster.toggle_ten(pid, 11)
    assert 11 in selected
    assert len(selected) == TENS_CAPACITY


def test_toggle_ten_twice_restores(roster):
    pid = _first(roster).id
    roster.toggle_ten(pid, 7)
    roster.toggle_ten(pid, 7)
    assert roster.get_player(pid).selected_tens == set()


def test_players_do_not_share_cards(roster):
    a = _first(roster)
    b = roster.add_player()
    roster.record_gross(a.id, 1, 4)
    roster.toggle_ten(a.id, 1)
    assert b.ledger == {}
    assert b.selected_tens == set()


def test_player_card(roster):
    pid = _first(roster).id
    roster.update_player(pid, PlayerUpdate(name="Ana", handicap=20))
    roster.record_gross(pid, 1, 6)
    roster.record_gross(pid, 10, 5)
    roster.toggle_ten(pid, 1)
    roster.toggle_ten(pid, 10)
    roster.set_play_tens(True)

    card = roster.player_card(pid)
    assert card.name == "Ana"
    assert len(card.holes) == 18
    assert card.holes[0].strokes == 2
    assert card.holes[0].net == 4
    assert card.holes[0].ten is True
    assert card.front.gross == 6
    assert card.front.net == 4
    assert card.back.gross == 5
    assert card.back.net == 4
    assert card.total.gross == 11
    assert card.total.strokes == 20
    assert card.total.par == 72
    assert card.tens.count == 2
    assert card.tens.total == 8
    assert card.tens.over_under == 0


def test_tens_hidden_unless_enabled(roster):
    pid = _first(roster).id
    roster.toggle_ten(pid, 3)
    assert all(c.tens is None for c in roster.scorecard().players)
    assert roster.player_card(pid).tens is None
    assert roster.player_card(pid).holes[2].ten is True

    roster.set_play_tens(True)
    assert roster.player_card(pid).tens.holes == [3]
    roster.toggle_ten(pid, 3)
    sc = roster.scorecard()
    assert sc.play_tens is True
    assert sc.players[0].tens.count == 0
    assert sc.course.total_par == 72


def test_set_course_clears_cards(roster, course_factory):
    pid = _first(roster).id
    roster.update_player(pid, PlayerUpdate(name="Ana", handicap=5))
    roster.record_gross(pid, 1, 4)
    roster.toggle_ten(pid, 1)

    # mismo campo: se conserva la tarjeta
    roster.set_course(roster.course)
    assert roster.get_player(pid).ledger

    roster.set_course(course_factory(list(range(1, 10)), course_id="nine"))
    p = roster.get_player(pid)
    assert p.ledger == {}
    assert p.selected_tens == set()
    assert (p.name, p.handicap) == ("Ana", 5)
    assert roster.course.hole_count == 9


def test_reselecting_course_drops_holes_no_longer_in_layout(roster, course_factory):
    nine = course_factory(list(range(1, 10)), course_id="club")
    roster.set_course(nine)
    roster.set_play_tens(True)
    pid = _first(roster).id
    roster.record_gross(pid, 2, 4)
    roster.record_gross(pid, 9, 5)
    roster.toggle_ten(pid, 2)
    roster.toggle_ten(pid, 9)

    # el catálogo cambió los hoyos del mismo campo
    roster.set_course(course_factory([1, 2, 3], course_id="club"))

    p = roster.get_player(pid)
    assert set(p.ledger) == {2}
    assert p.selected_tens == {2}
    card = roster.player_card(pid)
    assert card.total.gross == 4
    assert card.tens.count == 1
    assert card.tens.holes == [2]


def test_selected_hole_can_always_be_untoggled(roster, course_factory):
    pid = _first(roster).id
    roster.toggle_ten(pid, 18)
    # la selección quedó con un hoyo que el campo ya no tiene
    roster.course = course_factory([1, 2, 3], course_id=roster.course.id)
    assert roster.toggle_ten(pid, 18) == set()
    with pytest.raises(HoleNotFound):
        roster.toggle_ten(pid, 18)


def test_concurrent_adds_never_exceed_capacity(monkeypatch):
    roster = Roster()
    roster.add_player()
    roster.add_player()

    real_new_player = roster_module._new_player

    def slow_new_player():
        time.sleep(0.05)
        return real_new_player()

    monkeypatch.setattr(roster_module, "_new_player", slow_new_player)

    barrier = threading.Barrier(4)

    def add():
        barrier.wait()
        roster.add_player()

    threads = [threading.Thread(target=add) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(roster) == MAX_PLAYERS
