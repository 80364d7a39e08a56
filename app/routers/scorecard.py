# app/routers/scorecard.py

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db import get_db
from app import crud, schemas
from app.roster import (
    CourseNotSelected,
    HoleNotFound,
    PlayerNotFound,
    Roster,
    get_roster,
)

router = APIRouter(prefix="/scorecard", tags=["scorecard"])


def _player_or_404(roster: Roster, player_id: str):
    try:
        return roster.player_card(player_id)
    except PlayerNotFound:
        raise HTTPException(status_code=404, detail="Player not found")


def _translate(exc: Exception):
    if isinstance(exc, PlayerNotFound):
        return HTTPException(status_code=404, detail="Player not found")
    if isinstance(exc, HoleNotFound):
        return HTTPException(status_code=404, detail=f"Hole {exc} not in course")
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No course selected")


@router.get("", response_model=schemas.Scorecard)
def scorecard(roster: Roster = Depends(get_roster)):
    return roster.scorecard()


#--------------------------------------------------------------------------------
#---------------------------------- CAMPO / 10s ---------------------------------
#--------------------------------------------------------------------------------

@router.put("/course/default", response_model=schemas.Scorecard)
def use_default_course(roster: Roster = Depends(get_roster)):
    roster.set_course(crud.DEFAULT_COURSE)
    return roster.scorecard()


@router.put("/course/{course_id}", response_model=schemas.Scorecard)
def select_course(course_id: str, roster: Roster = Depends(get_roster), db: Session = Depends(get_db)):
    roster.set_course(crud.get_course_layout(db, course_id))
    return roster.scorecard()


@router.put("/tens", response_model=schemas.Scorecard)
def switch_tens(data: schemas.TensSwitch, roster: Roster = Depends(get_roster)):
    roster.set_play_tens(data.enabled)
    return roster.scorecard()


#--------------------------------------------------------------------------------
#----------------------------------- JUGADORES ----------------------------------
#--------------------------------------------------------------------------------

@router.post("/players", response_model=schemas.Scorecard)
def player_add(roster: Roster = Depends(get_roster)):
    # con 4 jugadores no se añade nada
    roster.add_player()
    return roster.scorecard()


@router.get("/players/{player_id}", response_model=schemas.PlayerCard)
def player_card(player_id: str, roster: Roster = Depends(get_roster)):
    return _player_or_404(roster, player_id)


@router.patch("/players/{player_id}", response_model=schemas.PlayerCard)
def player_edit(player_id: str, data: schemas.PlayerUpdate, roster: Roster = Depends(get_roster)):
    p = roster.update_player(player_id, data)
    if not p:
        raise HTTPException(status_code=404, detail="Player not found")
    return roster.player_card(p.id)


@router.delete("/players/{player_id}", response_model=schemas.Scorecard)
def player_delete(player_id: str, roster: Roster = Depends(get_roster)):
    try:
        roster.remove_player(player_id)
    except PlayerNotFound:
        raise HTTPException(status_code=404, detail="Player not found")
    return roster.scorecard()


@router.put("/players/{player_id}/holes/{hole_number}", response_model=schemas.PlayerCard)
def hole_score(player_id: str, hole_number: int, data: schemas.ScoreEntry, roster: Roster = Depends(get_roster)):
    try:
        roster.record_gross(player_id, hole_number, data.gross)
    except (PlayerNotFound, HoleNotFound, CourseNotSelected) as exc:
        raise _translate(exc)
    return roster.player_card(player_id)


@router.post("/players/{player_id}/tens/{hole_number}", response_model=schemas.PlayerCard)
def ten_toggle(player_id: str, hole_number: int, roster: Roster = Depends(get_roster)):
    try:
        roster.toggle_ten(player_id, hole_number)
    except (PlayerNotFound, HoleNotFound, CourseNotSelected) as exc:
        raise _translate(exc)
    return roster.player_card(player_id)
