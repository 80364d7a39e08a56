import logging
from typing import Optional

from sqlalchemy.orm import Session

from . import models, schemas

logger = logging.getLogger(__name__)


# Campo de referencia cuando no se encuentra el pedido
DEFAULT_COURSE = schemas.Course(
    id="augusta",
    name="Augusta National Golf Club",
    location="Augusta, GA",
    slope=155,
    rating=78.1,
    holes=[
        {"number": 1, "par": 4, "rank": 9},
        {"number": 2, "par": 5, "rank": 1},
        {"number": 3, "par": 4, "rank": 13},
        {"number": 4, "par": 3, "rank": 15},
        {"number": 5, "par": 4, "rank": 5},
        {"number": 6, "par": 3, "rank": 17},
        {"number": 7, "par": 4, "rank": 11},
        {"number": 8, "par": 5, "rank": 3},
        {"number": 9, "par": 4, "rank": 7},
        {"number": 10, "par": 4, "rank": 6},
        {"number": 11, "par": 4, "rank": 8},
        {"number": 12, "par": 3, "rank": 18},
        {"number": 13, "par": 5, "rank": 4},
        {"number": 14, "par": 4, "rank": 14},
        {"number": 15, "par": 5, "rank": 2},
        {"number": 16, "par": 3, "rank": 16},
        {"number": 17, "par": 4, "rank": 12},
        {"number": 18, "par": 4, "rank": 10},
    ],
)


def to_layout(c: models.Course) -> schemas.Course:
    return schemas.Course(
        id=str(c.id),
        name=c.name,
        location=c.location,
        slope=c.slope,
        rating=c.rating,
        holes=[{"number": h.number, "par": h.par, "rank": h.rank} for h in c.holes],
    )


def ranks_are_valid(holes) -> bool:
    return sorted(h.rank for h in holes) == list(range(1, len(holes) + 1))


#---------------------------------------------------------------------------------
# ------------------------------------ Course ------------------------------------
# --------------------------------------------------------------------------------

def get_courses(db: Session):
    return db.query(models.Course).order_by(models.Course.name).all()

def search_courses(db: Session, keyword: str):
    keyword = (keyword or "").strip()
    if len(keyword) < 2:
        return []
    return (
        db.query(models.Course)
        .filter(models.Course.name.ilike(f"%{keyword}%"))
        .order_by(models.Course.name)
        .all()
    )

def get_course(db: Session, course_id: int):
    return db.query(models.Course).filter(models.Course.id == course_id).first()

def get_course_layout(db: Session, course_id) -> schemas.Course:
    """
    Devuelve el campo listo para jugar.
    Si no existe o no tiene hoyos -> campo por defecto.
    """
    c = None
    try:
        c = get_course(db, int(course_id))
    except (TypeError, ValueError):
        pass

    if c is None or not c.holes:
        logger.warning("course %r not available, using %s", course_id, DEFAULT_COURSE.name)
        return DEFAULT_COURSE
    return to_layout(c)

def create_course(db: Session, data: schemas.CourseCreate):
    c = models.Course(**data.model_dump())
    db.add(c)
    db.commit()
    db.refresh(c)
    return c

def delete_course(db: Session, course_id: int):
    c = get_course(db, course_id)
    if not c:
        return False
    db.delete(c)
    db.commit()
    return True


#---------------------------------------------------------------------------------
# ------------------------------------- Holes ------------------------------------
# --------------------------------------------------------------------------------

def upsert_holes_for_course(db: Session, course_id: int, holes_data) -> Optional[models.Course]:
    c = get_course(db, course_id)
    if not c:
        return None

    schemas.check_hole_numbers(holes_data)
    if not ranks_are_valid(holes_data):
        # se acepta igual: el cálculo de golpes no falla con rangos raros
        logger.warning("course %s: hole ranks are not a permutation of 1..%d", course_id, len(holes_data))

    # borramos y reinsertamos los hoyos
    db.query(models.Hole).filter(models.Hole.course_id == course_id).delete()
    db.commit()

    for h in holes_data:
        db.add(models.Hole(course_id=course_id, **h.model_dump()))

    db.commit()
    db.refresh(c)
    return c

def ensure_default_course(db: Session):
    c = db.query(models.Course).filter(models.Course.name == DEFAULT_COURSE.name).first()
    if c:
        return c

    c = create_course(db, schemas.CourseCreate(
        name=DEFAULT_COURSE.name,
        location=DEFAULT_COURSE.location,
        slope=DEFAULT_COURSE.slope,
        rating=DEFAULT_COURSE.rating,
    ))
    holes = [schemas.HoleCreate(number=h.number, par=h.par, rank=h.rank) for h in DEFAULT_COURSE.holes]
    return upsert_holes_for_course(db, c.id, holes)
