from .schemas import HoleScore, SectionTotals, SideGameSummary

FRONT_NINE = 9


def strokes_for_hole(handicap: int, hole_rank: int, hole_count: int) -> int:
    """
    Golpes que recibe un jugador en un hoyo.
    hole_rank: dificultad del hoyo (1 = el más difícil)
    """
    base = handicap // hole_count
    extra = handicap % hole_count
    # rangos fuera de 1..hole_count nunca reciben el golpe extra
    return base + 1 if 1 <= hole_rank <= extra else base


def strokes_received_per_hole(handicap: int, holes):
    """
    holes: lista Hole con rank
    devuelve dict {hole_number: golpes_recibidos}
    """
    hole_count = len(holes)
    return {h.number: strokes_for_hole(handicap, h.rank, hole_count) for h in holes}


def net_score(gross: int, handicap: int, hole_rank: int, hole_count: int) -> int:
    # sin recortar: un neto negativo es válido
    return gross - strokes_for_hole(handicap, hole_rank, hole_count)


def score_hole(gross: int, handicap: int, hole, hole_count: int) -> HoleScore:
    return HoleScore(gross=gross, net=net_score(gross, handicap, hole.rank, hole_count))


#---------------------------------------------------------------------------------
# ---------------------------------- Totales -------------------------------------
# --------------------------------------------------------------------------------

def summarize(handicap: int, ledger, holes, hole_count: int) -> SectionTotals:
    """
    Suma bruto, neto y golpes recibidos sobre un subconjunto de hoyos.
    Un hoyo sin tarjeta cuenta 0 en bruto y neto; los golpes recibidos
    salen siempre del hándicap actual.
    """
    gross = net = strokes = par = 0
    for h in holes:
        entry = ledger.get(h.number)
        if entry is not None:
            gross += entry.gross
            net += entry.net
        strokes += strokes_for_hole(handicap, h.rank, hole_count)
        par += h.par
    return SectionTotals(gross=gross, net=net, strokes=strokes, par=par)


def section_totals(handicap: int, ledger, course):
    front, back = course.holes[:FRONT_NINE], course.holes[FRONT_NINE:]
    n = course.hole_count
    return {
        "front": summarize(handicap, ledger, front, n),
        "back": summarize(handicap, ledger, back, n),
        "total": summarize(handicap, ledger, course.holes, n),
    }


def side_game_summary(ledger, selected, course, capacity: int) -> SideGameSummary:
    total = 0
    par = 0
    for number in selected:
        entry = ledger.get(number)
        total += entry.net if entry is not None else 0
        hole = course.hole(number)
        if hole is not None:
            par += hole.par
    return SideGameSummary(
        count=len(selected),
        capacity=capacity,
        holes=sorted(selected),
        total=total,
        over_under=total - par,
    )
