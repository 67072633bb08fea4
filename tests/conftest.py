from __future__ import annotations

from typing import Any

import pytest

from kkextract.boxes import TextBox, make_box

_BOX_HEIGHT = 20.0

# (text, x, width) per box; one tuple of boxes per printed line.
_HEADER_LINES: tuple[tuple[float, tuple[tuple[str, float, float], ...]], ...] = (
    (20.0, (("KARTU KELUARGA", 300.0, 200.0),)),
    (60.0, (("No.", 250.0, 40.0), ("3201012345678901", 300.0, 200.0))),
    (100.0, (("Nama Kepala Keluarga", 40.0, 200.0), (":", 250.0, 10.0), ("BUDI SANTOSO", 270.0, 200.0))),
    (140.0, (("Alamat", 40.0, 200.0), (":", 250.0, 10.0), ("JL. MERDEKA NO. 10", 270.0, 200.0))),
    (180.0, (("RT/RW", 40.0, 200.0), (":", 250.0, 10.0), ("001/002", 270.0, 80.0))),
    (220.0, (("Desa/Kelurahan", 40.0, 200.0), (":", 250.0, 10.0), ("SUKAMAJU", 270.0, 120.0))),
    (260.0, (("Kecamatan", 40.0, 200.0), (":", 250.0, 10.0), ("CIBINONG", 270.0, 120.0))),
    (300.0, (("Kabupaten/Kota", 40.0, 200.0), (":", 250.0, 10.0), ("BOGOR", 270.0, 120.0))),
    (340.0, (("Provinsi", 40.0, 200.0), (":", 250.0, 10.0), ("JAWA BARAT", 270.0, 120.0))),
)

_PERSON_HEADER: tuple[tuple[str, float, float], ...] = (
    ("No", 20.0, 30.0),
    ("Nama Lengkap", 60.0, 180.0),
    ("NIK", 250.0, 160.0),
    ("Jenis Kelamin", 420.0, 100.0),
    ("Tempat Lahir", 530.0, 100.0),
    ("Tanggal Lahir", 640.0, 100.0),
    ("Agama", 750.0, 70.0),
    ("Pendidikan", 830.0, 100.0),
    ("Jenis Pekerjaan", 940.0, 120.0),
)
_PERSON_X: tuple[tuple[float, float], ...] = (
    (25.0, 10.0),
    (60.0, 180.0),
    (250.0, 160.0),
    (430.0, 80.0),
    (540.0, 80.0),
    (650.0, 80.0),
    (755.0, 60.0),
    (830.0, 100.0),
    (950.0, 100.0),
)
PERSON_ROWS: tuple[tuple[str, ...], ...] = (
    ("1", "BUDI SANTOSO", "3201010101010001", "LAKI-LAKI", "BOGOR", "01-01-1980", "ISLAM", "SLTA/SEDERAJAT", "WIRASWASTA"),
    ("2", "SITI AMINAH", "3201010101010002", "Perempuan", "BOGOR", "02-02-1982", "ISLAM", "DIPLOMA I/II", "MENGURUS RUMAH TANGGA"),
    ("3", "ANDI SANTOSO", "3201010101010003", "LAKI LAKI", "JAKARTA", "03/03/2010", "ISLAM", "SD", "PELAJAR/MAHASISWA"),
)

_STATUS_HEADER: tuple[tuple[str, float, float], ...] = (
    ("No", 20.0, 30.0),
    ("Status Perkawinan", 60.0, 160.0),
    ("Status Hubungan Dalam Keluarga", 230.0, 200.0),
    ("Kewarganegaraan", 440.0, 120.0),
    ("Nama Ayah", 600.0, 180.0),
    ("Nama Ibu", 800.0, 180.0),
)
_STATUS_X: tuple[tuple[float, float], ...] = (
    (25.0, 10.0),
    (100.0, 80.0),
    (260.0, 140.0),
    (480.0, 40.0),
    (640.0, 100.0),
    (840.0, 100.0),
)
STATUS_ROWS: tuple[tuple[str, ...], ...] = (
    ("1", "KAWIN TERCATAT", "KEPALA KELUARGA", "WNI", "AHMAD", "FATIMAH"),
    ("2", "KAWIN", "ISTRI", "WNI", "SUPARNO", "SUMIATI"),
)


def _line(y: float, cells: tuple[tuple[str, float, float], ...]) -> list[TextBox]:
    return [make_box(text, x, y, w, _BOX_HEIGHT) for text, x, w in cells]


def _data_line(y: float, texts: tuple[str, ...], xs: tuple[tuple[float, float], ...]) -> list[TextBox]:
    return [make_box(text, x, y, w, _BOX_HEIGHT) for text, (x, w) in zip(texts, xs)]


def build_family_card_boxes() -> list[TextBox]:
    boxes: list[TextBox] = []
    for y, cells in _HEADER_LINES:
        boxes.extend(_line(y, cells))

    boxes.extend(_line(400.0, _PERSON_HEADER))
    for index, texts in enumerate(PERSON_ROWS):
        boxes.extend(_data_line(440.0 + index * 40.0, texts, _PERSON_X))

    boxes.extend(_line(600.0, _STATUS_HEADER))
    for index, texts in enumerate(STATUS_ROWS):
        boxes.extend(_data_line(640.0 + index * 40.0, texts, _STATUS_X))
    return boxes


def boxes_to_payload(boxes: list[TextBox]) -> list[dict[str, Any]]:
    return [
        {"text": b.text, "x": b.x, "y": b.y, "w": b.w, "h": b.h, "cx": b.cx, "cy": b.cy}
        for b in boxes
    ]


@pytest.fixture
def family_card_boxes() -> list[TextBox]:
    return build_family_card_boxes()


@pytest.fixture
def family_card_payload() -> list[dict[str, Any]]:
    return boxes_to_payload(build_family_card_boxes())
