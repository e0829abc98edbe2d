"""Row Synthesizer: fabricates one row of cell values from a column list.

Shape is deterministic (one cell per column, type fixed by the column type),
values are random. Unknown types fall through to a placeholder string.
"""

import random
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from dbscope.schemas.query import CellValue
from dbscope.schemas.schema import Column

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def synthesize_cell(
    column: Column,
    rng: random.Random | None = None,
    clock: Clock = _utc_now,
) -> CellValue:
    source = rng or random
    col_type = column.type

    if col_type == "uuid":
        if rng is None:
            return str(uuid.uuid4())
        return str(uuid.UUID(int=rng.getrandbits(128), version=4))
    if col_type == "boolean":
        return source.random() > 0.5
    if col_type in ("integer", "serial"):
        return source.randrange(1000)
    if col_type.startswith("decimal"):
        return f"{source.random() * 1000:.2f}"
    if col_type == "timestamp":
        return _iso_timestamp(clock())
    return f"Sample {column.name}"


def synthesize_row(
    columns: Sequence[Column],
    rng: random.Random | None = None,
    clock: Clock = _utc_now,
) -> list[CellValue]:
    """Return one fabricated cell per column, in column order."""
    return [synthesize_cell(col, rng=rng, clock=clock) for col in columns]
