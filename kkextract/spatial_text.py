from __future__ import annotations

import logging
from collections.abc import Sequence

from kkextract.boxes import TextBox
from kkextract.rows import Row, build_rows

logger = logging.getLogger(__name__)

COLUMN_SEPARATOR = " | "
_CHAR_WIDTH_FACTOR = 0.8
_COLUMN_GAP_CHARS = 3


def to_spatial_text(boxes: Sequence[TextBox]) -> str:
    """
    Render boxes as text lines that keep the printed table layout.

    Boxes on one row are joined by a space, or by `" | "` where the horizontal gap
    is wider than about three characters. Never raises; returns "" on failure.
    """

    try:
        return "".join(_render_row(row) + "\n" for row in build_rows(boxes))
    except Exception:  # noqa: BLE001
        logger.debug("Spatial text rendering failed", exc_info=True)
        return ""


def _render_row(row: Row) -> str:
    parts: list[str] = []
    previous: TextBox | None = None
    for box in row:
        if previous is not None:
            gap = box.x - previous.right
            char_width = previous.h * _CHAR_WIDTH_FACTOR
            parts.append(COLUMN_SEPARATOR if gap > char_width * _COLUMN_GAP_CHARS else " ")
        parts.append(box.text)
        previous = box
    return "".join(parts)
