from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from kkextract.boxes import TextBox
from kkextract.rows import Row, join_row_text
from kkextract.vocabulary import HEADER_MIN_MATCHES, ROW_NUMBER_COLUMN


@dataclass(frozen=True)
class TableColumn:
    header: str
    x_min: float
    x_max: float

    @property
    def x_center(self) -> float:
        return (self.x_min + self.x_max) / 2.0

    def extended_to(self, box: TextBox) -> TableColumn:
        return TableColumn(
            header=self.header,
            x_min=min(self.x_min, box.x),
            x_max=max(self.x_max, box.right),
        )


def count_keyword_hits(text: str, keywords: Sequence[str]) -> int:
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword.lower() in lowered)


def find_header_row(
    rows: Sequence[Row],
    keywords: Sequence[str],
    *,
    min_matches: int = HEADER_MIN_MATCHES,
) -> int | None:
    """Index of the first row whose joined text holds at least `min_matches` keywords."""
    for index, row in enumerate(rows):
        if count_keyword_hits(join_row_text(row), keywords) >= min_matches:
            return index
    return None


def build_columns(header_row: Row, keywords: Sequence[str]) -> list[TableColumn]:
    """
    Derive column bands from a detected header row.

    Each header box maps to the first keyword (in declared order) it contains; boxes
    sharing a keyword widen that column. Boxes that match no keyword do not widen a
    neighbouring column, so a split header such as "Jenis" + "Kelamin" yields a
    band covering only "Kelamin".
    """

    columns: list[TableColumn] = []
    index_by_header: dict[str, int] = {}

    for box in header_row:
        keyword = _first_keyword(box.text, keywords)
        if keyword is None:
            continue
        if keyword in index_by_header:
            position = index_by_header[keyword]
            columns[position] = columns[position].extended_to(box)
        else:
            index_by_header[keyword] = len(columns)
            columns.append(TableColumn(header=keyword, x_min=box.x, x_max=box.right))

    if ROW_NUMBER_COLUMN not in index_by_header and header_row:
        first = header_row[0]
        if ROW_NUMBER_COLUMN.lower() in first.text.lower():
            columns.insert(
                0, TableColumn(header=ROW_NUMBER_COLUMN, x_min=first.x, x_max=first.right)
            )

    return columns


def _first_keyword(text: str, keywords: Sequence[str]) -> str | None:
    lowered = text.lower()
    for keyword in keywords:
        if keyword.lower() in lowered:
            return keyword
    return None
