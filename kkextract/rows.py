from __future__ import annotations

from collections.abc import Sequence
from functools import cmp_to_key

from kkextract.boxes import TextBox
from kkextract.vocabulary import DEFAULT_BOX_HEIGHT, ROW_THRESHOLD_FACTOR

Row = tuple[TextBox, ...]


def average_height(boxes: Sequence[TextBox]) -> float:
    if not boxes:
        return DEFAULT_BOX_HEIGHT
    return sum(box.h for box in boxes) / len(boxes)


def row_threshold(boxes: Sequence[TextBox]) -> float:
    return average_height(boxes) * ROW_THRESHOLD_FACTOR


def sort_reading_order(boxes: Sequence[TextBox], *, threshold: float) -> list[TextBox]:
    """
    Sort top-to-bottom, then left-to-right for boxes on roughly the same line.

    The comparison is not transitive near the threshold, so the order of boxes that
    straddle two lines can depend on input order. `sorted` is stable, which keeps
    that bounded to the straddling boxes.
    """

    def _compare(a: TextBox, b: TextBox) -> int:
        if abs(a.cy - b.cy) < threshold:
            return (a.cx > b.cx) - (a.cx < b.cx)
        return (a.cy > b.cy) - (a.cy < b.cy)

    return sorted(boxes, key=cmp_to_key(_compare))


def group_into_rows(boxes: Sequence[TextBox], *, threshold: float) -> list[Row]:
    """Split reading-ordered boxes into rows; a row is anchored on its first box."""
    if not boxes:
        return []

    rows: list[Row] = []
    current: list[TextBox] = []
    anchor_cy = boxes[0].cy
    for box in boxes:
        if abs(box.cy - anchor_cy) > threshold:
            if current:
                rows.append(tuple(current))
            current = []
            anchor_cy = box.cy
        current.append(box)
    if current:
        rows.append(tuple(current))
    return rows


def build_rows(boxes: Sequence[TextBox]) -> list[Row]:
    threshold = row_threshold(boxes)
    return group_into_rows(sort_reading_order(boxes, threshold=threshold), threshold=threshold)


def join_row_text(row: Sequence[TextBox]) -> str:
    return " ".join(box.text for box in row)
