from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, model_validator
from typing import Optional


#---------------------------------------------------------------------------------
# ------------------------------- Catálogo (entrada) -----------------------------
# --------------------------------------------------------------------------------

def check_hole_numbers(holes):
    # el número de hoyo es la clave de la tarjeta: no puede repetirse
    seen = set()
    for h in holes:
        if h.number in seen:
            raise ValueError(f"hole number {h.number} is repeated")
        seen.add(h.number)
    return holes


class CourseCreate(BaseModel):
    name: str = Field(min_length=1)
    location: Optional[str] = None
    slope: int = 113
    rating: float = 72.0


class HoleCreate(BaseModel):
    number: int = Field(ge=1)
    par: int = Field(ge=1)
    rank: int = Field(validation_alias=AliasChoices("rank", "stroke_index", "handicap"))


class CourseIn(CourseCreate):
    holes: list[HoleCreate] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_numbers(self):
        check_hole_numbers(self.holes)
        return self


#---------------------------------------------------------------------------------
# ---------------------------------- Campo ---------------------------------------
# --------------------------------------------------------------------------------

class Hole(BaseModel):
    number: int = Field(ge=1)
    par: int = Field(ge=1)
    # HCP del hoyo: 1 = el más difícil
    rank: int = Field(validation_alias=AliasChoices("rank", "stroke_index", "handicap"))

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Course(BaseModel):
    id: str
    name: str
    holes: tuple[Hole, ...] = Field(min_length=1)
    location: Optional[str] = None
    slope: Optional[int] = None
    rating: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _unique_numbers(self):
        check_hole_numbers(self.holes)
        return self

    @computed_field
    @property
    def total_par(self) -> int:
        return sum(h.par for h in self.holes)

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    def hole(self, number: int) -> Optional[Hole]:
        for h in self.holes:
            if h.number == number:
                return h
        return None


#---------------------------------------------------------------------------------
# ---------------------------------- Jugadores -----------------------------------
# --------------------------------------------------------------------------------

class PlayerUpdate(BaseModel):
    name: Optional[str] = None
    handicap: Optional[int] = Field(default=None, ge=0)


class ScoreEntry(BaseModel):
    gross: int = Field(ge=0)


class TensSwitch(BaseModel):
    enabled: bool


class AdminLogin(BaseModel):
    key: str


#---------------------------------------------------------------------------------
# ---------------------------------- Tarjeta -------------------------------------
# --------------------------------------------------------------------------------

class HoleScore(BaseModel):
    gross: int
    net: int

    model_config = ConfigDict(frozen=True)


class SectionTotals(BaseModel):
    gross: int = 0
    net: int = 0
    strokes: int = 0
    par: int = 0


class SideGameSummary(BaseModel):
    count: int = 0
    capacity: int
    holes: list[int] = Field(default_factory=list)
    total: int = 0
    over_under: int = 0


class HoleRow(BaseModel):
    number: int
    par: int
    rank: int
    strokes: int
    gross: Optional[int] = None
    net: Optional[int] = None
    ten: bool = False


class PlayerCard(BaseModel):
    id: str
    name: str
    handicap: int
    holes: list[HoleRow] = Field(default_factory=list)
    front: SectionTotals = Field(default_factory=SectionTotals)
    back: SectionTotals = Field(default_factory=SectionTotals)
    total: SectionTotals = Field(default_factory=SectionTotals)
    tens: Optional[SideGameSummary] = None


class Scorecard(BaseModel):
    course: Optional[Course] = None
    play_tens: bool = False
    max_players: int
    players: list[PlayerCard] = Field(default_factory=list)
