# app/routers/public.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app import crud, schemas

router = APIRouter(tags=["courses"])


@router.get("/courses")
def courses_list(q: Optional[str] = None, db: Session = Depends(get_db)):
    courses = crud.search_courses(db, q) if q is not None else crud.get_courses(db)
    return [
        {"id": str(c.id), "name": c.name, "location": c.location, "holes": len(c.holes)}
        for c in courses
    ]


@router.get("/courses/default", response_model=schemas.Course)
def course_default():
    return crud.DEFAULT_COURSE


@router.get("/courses/{course_id}", response_model=schemas.Course)
def course_detail(course_id: str, db: Session = Depends(get_db)):
    return crud.get_course_layout(db, course_id)
