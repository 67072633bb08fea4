from __future__ import annotations

import re
from typing import Final

NIK_RE: Final[re.Pattern[str]] = re.compile(r"\d{16}")
DATE_RE: Final[re.Pattern[str]] = re.compile(r"\d{2}[-/]\d{2}[-/]\d{4}")
RT_RW_RE: Final[re.Pattern[str]] = re.compile(r"\d{3}/\d{3}")
ROW_NUMBER_RE: Final[re.Pattern[str]] = re.compile(r"^\d{1,2}$")
LEADING_DIGITS_RE: Final[re.Pattern[str]] = re.compile(r"^\d+\s*")
NAME_CANDIDATE_RE: Final[re.Pattern[str]] = re.compile(r"[A-Z][A-Z\s.]+")

DEFAULT_BOX_HEIGHT: Final[float] = 20.0
ROW_THRESHOLD_FACTOR: Final[float] = 0.7
HEADER_MIN_MATCHES: Final[int] = 3
BOUNDARY_MIN_MATCHES: Final[int] = 3
FALLBACK_ROW_HEIGHT_FACTOR: Final[float] = 1.5

# Column headers of the person table (left) and the civil-status table (right).
# Order matters: a header box is mapped to the first keyword it contains.
TABLE1_KEYWORDS: Final[tuple[str, ...]] = (
    "NIK",
    "Nama",
    "Kelamin",
    "Tempat",
    "Lahir",
    "Agama",
    "Pendidikan",
    "Pekerjaan",
)
TABLE2_KEYWORDS: Final[tuple[str, ...]] = (
    "Perkawinan",
    "Hubungan",
    "Kewarganegaraan",
    "Ayah",
    "Ibu",
)
ROW_NUMBER_COLUMN: Final[str] = "No"

BOUNDARY_KEYWORDS: Final[tuple[str, ...]] = (
    "nik",
    "nama",
    "kelamin",
    "agama",
    "perkawinan",
    "hubungan",
    "ayah",
    "ibu",
)

LABEL_TOKENS: Final[tuple[str, ...]] = (
    "NIK",
    "NAMA",
    "TEMPAT",
    "TANGGAL",
    "LAHIR",
    "AGAMA",
    "PENDIDIKAN",
    "PEKERJAAN",
    "STATUS",
    "HUBUNGAN",
    "KEWARGANEGARAAN",
    "AYAH",
    "IBU",
    "ALAMAT",
    "DESA",
    "KELURAHAN",
    "KECAMATAN",
    "KABUPATEN",
    "KOTA",
    "PROVINSI",
    "NO",
    "RT",
    "RW",
    "KODE",
    "KARTU",
    "KELUARGA",
    "JENIS",
    "KELAMIN",
    "PERKAWINAN",
    "DOKUMEN",
    "IMIGRASI",
    "LENGKAP",
    "POS",
)

# (output key, label variants) for the label-anchored header fields.
HEADER_LABELS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("kepala_keluarga", ("Kepala Keluarga",)),
    ("alamat", ("Alamat",)),
    ("desa_kelurahan", ("Desa/Kelurahan", "Desa", "Kelurahan")),
    ("kecamatan", ("Kecamatan",)),
    ("kabupaten_kota", ("Kabupaten/Kota", "Kabupaten")),
    ("provinsi", ("Provinsi",)),
)

NormalizationRules = tuple[tuple[re.Pattern[str], str], ...]


def _rules(*pairs: tuple[str, str]) -> NormalizationRules:
    return tuple((re.compile(pattern), canonical) for pattern, canonical in pairs)


# Evaluated top to bottom against the upper-cased text; the first hit wins.
GENDER_RULES: Final[NormalizationRules] = _rules(
    (r"LAKI", "LAKI-LAKI"),
    (r"PEREMPUAN|^PR$|^P$", "PEREMPUAN"),
)
RELIGION_RULES: Final[NormalizationRules] = _rules(
    (r"ISLAM", "ISLAM"),
    (r"KRISTEN", "KRISTEN"),
    (r"KATOLIK", "KATOLIK"),
    (r"HINDU", "HINDU"),
    (r"BUDHA", "BUDHA"),
    (r"BUDDHA", "BUDDHA"),
    (r"KONGHUCU", "KONGHUCU"),
)
MARITAL_RULES: Final[NormalizationRules] = _rules(
    (r"BELUM", "BELUM KAWIN"),
    (r"CERAI HIDUP", "CERAI HIDUP"),
    (r"CERAI MATI", "CERAI MATI"),
    (r"KAWIN", "KAWIN"),
)
RELATION_RULES: Final[NormalizationRules] = _rules(
    (r"KEPALA", "KEPALA KELUARGA"),
    (r"ISTRI", "ISTRI"),
    (r"ANAK", "ANAK"),
    (r"MENANTU", "MENANTU"),
    (r"CUCU", "CUCU"),
    (r"ORANG TUA", "ORANG TUA"),
    (r"MERTUA", "MERTUA"),
    (r"FAMILI", "FAMILI LAIN"),
)
CITIZENSHIP_RULES: Final[NormalizationRules] = _rules(
    (r"WNI", "WNI"),
    (r"WNA", "WNA"),
)


def is_label_text(text: str) -> bool:
    """True when `text` is (or contains, as a whole word) a printed form label."""
    upper = text.upper().strip()
    for label in LABEL_TOKENS:
        if upper == label or f"{label} " in upper or f" {label}" in upper:
            return True
    return False
