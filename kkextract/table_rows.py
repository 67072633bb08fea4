from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from kkextract.rows import Row, join_row_text
from kkextract.table_columns import TableColumn, count_keyword_hits
from kkextract.vocabulary import BOUNDARY_KEYWORDS, BOUNDARY_MIN_MATCHES, ROW_NUMBER_RE


@dataclass(frozen=True)
class TableRow:
    row_number: int | None
    values: dict[str, str] = field(default_factory=dict)

    @property
    def joinable(self) -> bool:
        return self.row_number is not None and self.row_number > 0


def parse_row_number(row: Row) -> int | None:
    if not row:
        return None
    text = row[0].text.strip()
    if ROW_NUMBER_RE.match(text) is None:
        return None
    return int(text)


def is_table_boundary(row: Row) -> bool:
    return count_keyword_hits(join_row_text(row), BOUNDARY_KEYWORDS) >= BOUNDARY_MIN_MATCHES


def nearest_column(columns: Sequence[TableColumn], x: float) -> TableColumn | None:
    best: TableColumn | None = None
    best_distance = float("inf")
    for column in columns:
        distance = abs(column.x_center - x)
        if distance < best_distance:
            best_distance = distance
            best = column
    return best


def parse_data_rows(
    rows: Sequence[Row],
    header_index: int | None,
    end_index: int,
    columns: Sequence[TableColumn],
) -> list[TableRow]:
    """
    Parse the data rows between a table header and `end_index` (exclusive).

    Unnumbered rows before the first numbered one are skipped. After that, an
    unnumbered row that looks like another header ends the table.
    """

    if header_index is None or not columns:
        return []

    parsed: list[TableRow] = []
    for row in rows[header_index + 1 : end_index]:
        if not row:
            continue

        row_number = parse_row_number(row)
        if row_number is None:
            if not parsed:
                continue
            if is_table_boundary(row):
                break

        values: dict[str, str] = {}
        for box in row:
            column = nearest_column(columns, box.cx)
            if column is None:
                continue
            existing = values.get(column.header)
            values[column.header] = f"{existing} {box.text}" if existing else box.text

        if row_number is not None or any(values.values()):
            parsed.append(TableRow(row_number=row_number, values=values))
    return parsed
