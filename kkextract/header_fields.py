from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from kkextract.boxes import TextBox
from kkextract.rows import Row, join_row_text
from kkextract.vocabulary import HEADER_LABELS, NIK_RE, RT_RW_RE, is_label_text


@dataclass(frozen=True)
class HeaderFields:
    no_kk: str = ""
    kepala_keluarga: str = ""
    alamat: str = ""
    rt_rw: str = ""
    desa_kelurahan: str = ""
    kecamatan: str = ""
    kabupaten_kota: str = ""
    provinsi: str = ""


def extract_header_fields(boxes: Sequence[TextBox], rows: Sequence[Row]) -> HeaderFields:
    """
    Read the card's header block.

    `no_kk` is the first 16-digit run on the page and `rt_rw` the first `ddd/ddd`
    run; the remaining fields are label-anchored searches over the rows.
    """

    labeled = {key: find_label_value(rows, variants) for key, variants in HEADER_LABELS}
    return HeaderFields(
        no_kk=find_pattern_value(boxes, NIK_RE),
        rt_rw=find_pattern_value(boxes, RT_RW_RE),
        **labeled,
    )


def find_pattern_value(boxes: Sequence[TextBox], pattern: re.Pattern[str]) -> str:
    for box in boxes:
        match = pattern.search(box.text)
        if match is not None:
            return match.group()
    return ""


def find_label_value(rows: Sequence[Row], label_variants: Sequence[str]) -> str:
    """
    Return the value printed next to the first row that carries one of the labels.

    Within a matched row the text after the first colon wins; otherwise the first
    box right of the label box that is not itself a label. Rows that carry the label
    but yield no value do not stop the search.
    """

    for row in rows:
        joined = join_row_text(row)
        joined_lower = joined.lower()
        for label in label_variants:
            label_lower = label.lower()
            if label_lower not in joined_lower:
                continue

            value = _value_after_colon(joined)
            if value:
                return value

            value = _value_right_of_label(row, label_lower)
            if value:
                return value
    return ""


def _value_after_colon(joined: str) -> str:
    _, colon, rest = joined.partition(":")
    if not colon:
        return ""
    return rest.strip()


def _value_right_of_label(row: Row, label_lower: str) -> str:
    for index, box in enumerate(row):
        if label_lower not in box.text.lower():
            continue
        for candidate in row[index + 1 :]:
            text = candidate.text.strip()
            if not is_label_text(text):
                return text
    return ""
