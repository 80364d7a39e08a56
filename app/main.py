import logging
import os
from typing import List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from . import crud, schemas
from .db import Base, SessionLocal, engine, get_db
from .routers import public, scorecard

logger = logging.getLogger(__name__)


Base.metadata.create_all(bind=engine)

def seed_default_course():
    # El campo de referencia siempre está en el catálogo
    with SessionLocal() as db:
        crud.ensure_default_course(db)

seed_default_course()


app = FastAPI(title="Golf Scorecard")
app.include_router(public.router)
app.include_router(scorecard.router)

ADMIN_KEY = os.getenv("ADMIN_KEY", "")  # en local puedes dejarlo vacío


def require_admin(request: Request, x_admin_key: Optional[str] = Header(default=None)):
    # 1) Si no hay ADMIN_KEY configurada, NO protegemos (modo dev)
    if not ADMIN_KEY:
        return

    # 2) Comprobamos cookie o cabecera
    if request.cookies.get("admin_key") == ADMIN_KEY or x_admin_key == ADMIN_KEY:
        return

    # 3) Si no coincide -> fuera
    raise HTTPException(status_code=401, detail="Admin auth required")


# ================================================================================
# =============================== PASSWORD ADMIN =================================
# ================================================================================

@app.post("/admin/login")
def admin_login_submit(data: schemas.AdminLogin):
    resp = RedirectResponse("/courses", status_code=303)
    if not ADMIN_KEY:
        return resp

    if data.key != ADMIN_KEY:
        raise HTTPException(status_code=401, detail="Clave incorrecta")

    resp.set_cookie(
        "admin_key",
        data.key,
        httponly=True,
        samesite="lax",
        max_age=60 * 60 * 12,  # 12 horas
    )
    return resp


@app.get("/admin/logout")
def admin_logout():
    resp = RedirectResponse("/scorecard", status_code=303)
    resp.delete_cookie("admin_key")
    return resp


# ---------------------------------------------------------------------------------

@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/scorecard")


#--------------------------------------------------------------------------------
#------------------------------ ADMIN: COURSES ----------------------------------
#--------------------------------------------------------------------------------

@app.post("/admin/courses", response_model=schemas.Course, status_code=201,
          dependencies=[Depends(require_admin)])
def course_new(data: schemas.CourseIn, db: Session = Depends(get_db)):
    c = crud.create_course(db, schemas.CourseCreate(**data.model_dump(exclude={"holes"})))
    c = crud.upsert_holes_for_course(db, c.id, data.holes)
    logger.info("course %s created with %d holes", c.id, len(c.holes))
    return crud.to_layout(c)


@app.put("/admin/courses/{course_id}/holes", response_model=schemas.Course,
         dependencies=[Depends(require_admin)])
def holes_save(course_id: int, holes: List[schemas.HoleCreate], db: Session = Depends(get_db)):
    if not holes:
        raise HTTPException(status_code=422, detail="At least one hole is required")
    try:
        c = crud.upsert_holes_for_course(db, course_id, holes)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    if not c:
        raise HTTPException(status_code=404, detail="Course not found")
    return crud.to_layout(c)


@app.delete("/admin/courses/{course_id}", dependencies=[Depends(require_admin)])
def course_delete(course_id: int, db: Session = Depends(get_db)):
    if not crud.delete_course(db, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return {"ok": True}
