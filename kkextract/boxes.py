from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_COORDINATE_KEYS: tuple[str, ...] = ("x", "y", "w", "h")


@dataclass(frozen=True)
class TextBox:
    """One OCR text fragment in image pixel space (top-left origin)."""

    text: str
    x: float
    y: float
    w: float
    h: float
    cx: float
    cy: float

    @property
    def right(self) -> float:
        return self.x + self.w


def make_box(text: str, x: float, y: float, w: float, h: float) -> TextBox:
    return TextBox(text=text, x=x, y=y, w=w, h=h, cx=x + w / 2.0, cy=y + h / 2.0)


def parse_boxes(payload: str | bytes | list[Any] | None) -> list[TextBox]:
    """
    Parse the OCR collaborator's box list.

    Accepts a JSON array (as text or UTF-8 bytes) or an already decoded list of
    mappings with `text`, `x`, `y`, `w`, `h` and optionally `cx`, `cy`.
    Missing centers are derived from the rectangle.
    """

    if payload is None:
        raise ValueError("No OCR boxes provided")
    if isinstance(payload, bytes):
        payload = payload.decode("utf-8")
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid box JSON: {exc.msg}") from exc
    if not isinstance(payload, list):
        raise ValueError(f"Box payload must be a JSON array, got: {type(payload).__name__}")

    return [_parse_box(index, record) for index, record in enumerate(payload)]


def _parse_box(index: int, record: Any) -> TextBox:
    if not isinstance(record, Mapping):
        raise ValueError(f"Box {index} must be an object, got: {type(record).__name__}")

    text = record.get("text")
    if not isinstance(text, str):
        raise ValueError(f"Box {index} has no text")

    x, y, w, h = (_coordinate(index, record, key) for key in _COORDINATE_KEYS)
    cx = _coordinate(index, record, "cx") if "cx" in record else x + w / 2.0
    cy = _coordinate(index, record, "cy") if "cy" in record else y + h / 2.0
    return TextBox(text=text, x=x, y=y, w=w, h=h, cx=cx, cy=cy)


def _coordinate(index: int, record: Mapping[str, Any], key: str) -> float:
    raw = record.get(key)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"Box {index} field {key!r} must be a number, got: {raw!r}")
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"Box {index} field {key!r} must be finite, got: {raw!r}")
    return value
