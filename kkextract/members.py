from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from kkextract.normalize import (
    normalize_citizenship,
    normalize_gender,
    normalize_marital_status,
    normalize_relation,
    normalize_religion,
)
from kkextract.table_rows import TableRow
from kkextract.vocabulary import DATE_RE, LEADING_DIGITS_RE, NIK_RE


@dataclass(frozen=True)
class Member:
    nik: str = ""
    nama: str = ""
    jenis_kelamin: str = ""
    tempat_lahir: str = ""
    tanggal_lahir: str = ""
    agama: str = ""
    pendidikan: str = ""
    pekerjaan: str = ""
    status_perkawinan: str = ""
    hubungan_keluarga: str = ""
    kewarganegaraan: str = ""
    nama_ayah: str = ""
    nama_ibu: str = ""

    @property
    def identified(self) -> bool:
        return bool(self.nik or self.nama)


def get_value(values: Mapping[str, str], keys: Sequence[str]) -> str:
    for key in keys:
        value = values.get(key)
        if value:
            return value.strip()
    return ""


def get_value_or_pattern(
    values: Mapping[str, str], keys: Sequence[str], pattern: re.Pattern[str]
) -> str:
    value = get_value(values, keys)
    if not value:
        return ""
    match = pattern.search(value)
    return match.group() if match is not None else value


def merge_tables_to_members(
    table1: Sequence[TableRow],
    table2: Sequence[TableRow],
) -> list[Member]:
    """
    Join the person table with the civil-status table on the row number.

    Table 2 rows without a usable row number cannot be joined and are dropped.
    Only members with a NIK or a name are returned.
    """

    table2_by_number = {row.row_number: row for row in table2 if row.joinable}

    members: list[Member] = []
    for row1 in table1:
        row2 = table2_by_number.get(row1.row_number) if row1.joinable else None
        member = _member_from_rows(row1, row2)
        if member.identified:
            members.append(member)
    return members


def _member_from_rows(row1: TableRow, row2: TableRow | None) -> Member:
    values = row1.values
    nama = LEADING_DIGITS_RE.sub("", get_value(values, ("Nama",))).strip()
    person = dict(
        nik=get_value_or_pattern(values, ("NIK",), NIK_RE),
        nama=nama,
        jenis_kelamin=normalize_gender(get_value(values, ("Kelamin", "Jenis Kelamin"))),
        tempat_lahir=get_value(values, ("Tempat",)),
        tanggal_lahir=get_value_or_pattern(values, ("Lahir", "Tanggal"), DATE_RE),
        agama=normalize_religion(get_value(values, ("Agama",))),
        pendidikan=get_value(values, ("Pendidikan",)),
        pekerjaan=get_value(values, ("Pekerjaan",)),
    )
    if row2 is None:
        return Member(**person)

    status = row2.values
    return Member(
        **person,
        status_perkawinan=normalize_marital_status(get_value(status, ("Perkawinan",))),
        hubungan_keluarga=normalize_relation(get_value(status, ("Hubungan",))),
        kewarganegaraan=normalize_citizenship(get_value(status, ("Kewarganegaraan",))),
        nama_ayah=get_value(status, ("Ayah",)),
        nama_ibu=get_value(status, ("Ibu",)),
    )
