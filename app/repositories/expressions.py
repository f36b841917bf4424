"""시프트 근무 시간 SQL 식 — 방언별 컴파일.

SQL expression for a shift's duration in seconds, compiled per dialect:

    PostgreSQL: EXTRACT(EPOCH FROM (COALESCE(end_date, date) + end_time) - (date + start_time))
    SQLite:     strftime('%s', end instant) - strftime('%s', start instant)

Both compute full date+time arithmetic, so multi-day shifts are measured
correctly.
"""

from typing import Any

from sqlalchemy import Integer, Numeric, String, cast, extract, func, literal
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from app.models.shift import Shift


class shift_duration_seconds(FunctionElement):
    """시프트 한 건의 근무 시간(초)."""

    type = Numeric()
    inherit_cache = True
    name = "shift_duration_seconds"


def _end_date() -> Any:
    return func.coalesce(Shift.end_date, Shift.date)


def _as_text(expr: Any) -> Any:
    return cast(expr, String)


@compiles(shift_duration_seconds)
def _compile_default(element: shift_duration_seconds, compiler: Any, **kw: Any) -> str:
    # 기본 방언은 PostgreSQL 문법 — Default rendering follows PostgreSQL
    span = (_end_date() + Shift.end_time) - (Shift.date + Shift.start_time)
    return compiler.process(extract("epoch", span), **kw)


@compiles(shift_duration_seconds, "sqlite")
def _compile_sqlite(element: shift_duration_seconds, compiler: Any, **kw: Any) -> str:
    epoch = literal("%s")
    end_instant = func.strftime(epoch, _as_text(_end_date()) + " " + _as_text(Shift.end_time))
    start_instant = func.strftime(epoch, _as_text(Shift.date) + " " + _as_text(Shift.start_time))
    return compiler.process(cast(end_instant, Integer) - cast(start_instant, Integer), **kw)
