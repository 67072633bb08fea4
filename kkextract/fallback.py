from __future__ import annotations

from collections.abc import Sequence

from kkextract.boxes import TextBox
from kkextract.members import Member
from kkextract.vocabulary import (
    DATE_RE,
    FALLBACK_ROW_HEIGHT_FACTOR,
    NAME_CANDIDATE_RE,
    NIK_RE,
    is_label_text,
)


def is_name_candidate(text: str) -> bool:
    return (
        NAME_CANDIDATE_RE.fullmatch(text) is not None
        and len(text) > 3
        and not is_label_text(text)
    )


def fallback_members(boxes: Sequence[TextBox]) -> list[Member]:
    """
    Best-effort members from the raw boxes when no table could be parsed.

    Every 16-digit box after the first (the first is the card number) becomes a
    member; its name and birth date are the first candidates, in input order, that
    sit within 1.5 box heights of it vertically.
    """

    nik_boxes: list[TextBox] = []
    date_boxes: list[TextBox] = []
    name_boxes: list[TextBox] = []
    for box in boxes:
        if NIK_RE.search(box.text):
            nik_boxes.append(box)
        if DATE_RE.search(box.text):
            date_boxes.append(box)
        if is_name_candidate(box.text):
            name_boxes.append(box)

    members: list[Member] = []
    for nik_box in nik_boxes[1:]:
        match = NIK_RE.search(nik_box.text)
        members.append(
            Member(
                nik=match.group() if match is not None else "",
                nama=_nearest_text(name_boxes, nik_box),
                tanggal_lahir=_nearest_date(date_boxes, nik_box),
            )
        )
    return members


def _on_same_line(candidate: TextBox, anchor: TextBox) -> bool:
    return abs(candidate.cy - anchor.cy) < anchor.h * FALLBACK_ROW_HEIGHT_FACTOR


def _nearest_text(candidates: Sequence[TextBox], anchor: TextBox) -> str:
    for box in candidates:
        if _on_same_line(box, anchor):
            return box.text
    return ""


def _nearest_date(candidates: Sequence[TextBox], anchor: TextBox) -> str:
    for box in candidates:
        if _on_same_line(box, anchor):
            match = DATE_RE.search(box.text)
            if match is not None:
                return match.group()
    return ""
