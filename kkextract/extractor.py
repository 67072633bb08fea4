from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
from typing import Any, Final

from kkextract.boxes import TextBox, parse_boxes
from kkextract.fallback import fallback_members
from kkextract.header_fields import HeaderFields, extract_header_fields
from kkextract.members import Member, merge_tables_to_members
from kkextract.rows import Row, group_into_rows, row_threshold, sort_reading_order
from kkextract.table_columns import build_columns, find_header_row
from kkextract.table_rows import parse_data_rows
from kkextract.vocabulary import TABLE1_KEYWORDS, TABLE2_KEYWORDS

logger = logging.getLogger(__name__)

MEMBERS_KEY: Final[str] = "anggota_keluarga"
ERROR_KEY: Final[str] = "error"

MemberStrategy = Callable[[Sequence[TextBox], Sequence[Row]], list[Member]]


@dataclass(frozen=True)
class ExtractionResult:
    header: HeaderFields
    members: tuple[Member, ...] = ()
    strategy: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = asdict(self.header)
        data[MEMBERS_KEY] = [asdict(member) for member in self.members]
        return data


def table_members(boxes: Sequence[TextBox], rows: Sequence[Row]) -> list[Member]:
    _ = boxes
    t1_index = find_header_row(rows, TABLE1_KEYWORDS)
    t2_index = find_header_row(rows, TABLE2_KEYWORDS)
    logger.debug("Table header rows: person=%s status=%s", t1_index, t2_index)

    t1_columns = build_columns(rows[t1_index], TABLE1_KEYWORDS) if t1_index is not None else []
    t2_columns = build_columns(rows[t2_index], TABLE2_KEYWORDS) if t2_index is not None else []

    t1_end = len(rows)
    if t1_index is not None and t2_index is not None and t2_index > t1_index:
        t1_end = t2_index

    t1_rows = parse_data_rows(rows, t1_index, t1_end, t1_columns)
    t2_rows = parse_data_rows(rows, t2_index, len(rows), t2_columns)
    logger.debug("Parsed table rows: person=%d status=%d", len(t1_rows), len(t2_rows))
    return merge_tables_to_members(t1_rows, t2_rows)


def raw_box_members(boxes: Sequence[TextBox], rows: Sequence[Row]) -> list[Member]:
    _ = rows
    return fallback_members(boxes)


# Tried in order; the first strategy that yields a member wins.
MEMBER_STRATEGIES: Final[tuple[tuple[str, MemberStrategy], ...]] = (
    ("table", table_members),
    ("fallback", raw_box_members),
)


def extract_family_card(boxes: Sequence[TextBox]) -> ExtractionResult:
    """
    Reconstruct a family card from OCR boxes.

    Pure and reentrant: no state is shared between calls. Exceptions propagate;
    use `extract_family_card_json` for the error-object contract.
    """

    threshold = row_threshold(boxes)
    # Header patterns and the fallback scan read boxes in reading order too.
    ordered = sort_reading_order(boxes, threshold=threshold)
    rows = group_into_rows(ordered, threshold=threshold)
    header = extract_header_fields(ordered, rows)

    for name, strategy in MEMBER_STRATEGIES:
        members = strategy(ordered, rows)
        if members:
            if name != MEMBER_STRATEGIES[0][0]:
                logger.info("Table extraction found no members; used %s strategy", name)
            logger.debug(
                "Extracted %d members from %d boxes in %d rows (%s)",
                len(members),
                len(boxes),
                len(rows),
                name,
            )
            return ExtractionResult(header=header, members=tuple(members), strategy=name)

    logger.debug("No members found in %d boxes", len(boxes))
    return ExtractionResult(header=header)


def extract_family_card_json(
    payload: str | bytes | list[Any] | None,
    *,
    max_boxes: int | None = None,
) -> dict[str, Any]:
    """Parse `payload`, extract, and return the JSON-ready record or `{"error": ...}`."""
    try:
        boxes = parse_boxes(payload)
        if max_boxes is not None and len(boxes) > max_boxes:
            raise ValueError(f"Too many boxes ({len(boxes)}), max_boxes={max_boxes}")
    except ValueError as exc:
        logger.warning("Rejected box payload: %s", exc)
        return {ERROR_KEY: _error_message(exc)}
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to parse box payload")
        return {ERROR_KEY: _error_message(exc)}

    try:
        return extract_family_card(boxes).to_dict()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Family card extraction failed")
        return {ERROR_KEY: _error_message(exc)}


def _error_message(exc: BaseException) -> str:
    message = str(exc).strip()
    return message or type(exc).__name__
