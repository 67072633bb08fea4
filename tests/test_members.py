from __future__ import annotations

from kkextract.members import Member, get_value, get_value_or_pattern, merge_tables_to_members
from kkextract.table_rows import TableRow
from kkextract.vocabulary import DATE_RE


def _person_row(number: int | None, **values: str) -> TableRow:
    return TableRow(row_number=number, values=dict(values))


def _status_row(number: int | None, **values: str) -> TableRow:
    return TableRow(row_number=number, values=dict(values))


def test_merge_combines_rows_with_same_number() -> None:
    table1 = [
        _person_row(
            1,
            No="1",
            Nama="BUDI SANTOSO",
            NIK="3201010101010001",
            Kelamin="LAKI-LAKI",
            Tempat="BOGOR",
            Lahir="01-01-1980",
            Agama="Islam",
            Pendidikan="SLTA/SEDERAJAT",
            Pekerjaan="WIRASWASTA",
        )
    ]
    table2 = [
        _status_row(
            1,
            Perkawinan="KAWIN TERCATAT",
            Hubungan="KEPALA KELUARGA",
            Kewarganegaraan="WNI",
            Ayah="AHMAD",
            Ibu="FATIMAH",
        )
    ]

    members = merge_tables_to_members(table1, table2)

    assert members == [
        Member(
            nik="3201010101010001",
            nama="BUDI SANTOSO",
            jenis_kelamin="LAKI-LAKI",
            tempat_lahir="BOGOR",
            tanggal_lahir="01-01-1980",
            agama="ISLAM",
            pendidikan="SLTA/SEDERAJAT",
            pekerjaan="WIRASWASTA",
            status_perkawinan="KAWIN",
            hubungan_keluarga="KEPALA KELUARGA",
            kewarganegaraan="WNI",
            nama_ayah="AHMAD",
            nama_ibu="FATIMAH",
        )
    ]


def test_merge_leaves_status_fields_empty_without_matching_row() -> None:
    table1 = [_person_row(2, Nama="SITI AMINAH", NIK="3201010101010002")]
    table2 = [_status_row(1, Perkawinan="KAWIN", Ayah="AHMAD")]

    (member,) = merge_tables_to_members(table1, table2)

    assert member.nama == "SITI AMINAH"
    assert member.status_perkawinan == ""
    assert member.hubungan_keluarga == ""
    assert member.kewarganegaraan == ""
    assert member.nama_ayah == ""
    assert member.nama_ibu == ""


def test_merge_does_not_join_unnumbered_rows() -> None:
    table1 = [_person_row(None, Nama="SANTOSO")]
    table2 = [_status_row(None, Ayah="AHMAD")]

    (member,) = merge_tables_to_members(table1, table2)

    assert member.nama == "SANTOSO"
    assert member.nama_ayah == ""


def test_merge_cleans_nik_and_name() -> None:
    table1 = [_person_row(1, Nama="1 BUDI SANTOSO ", NIK="NIK 3201010101010001 x")]

    (member,) = merge_tables_to_members(table1, [])

    assert member.nik == "3201010101010001"
    assert member.nama == "BUDI SANTOSO"


def test_merge_keeps_raw_nik_when_pattern_missing() -> None:
    (member,) = merge_tables_to_members([_person_row(1, NIK="32010101")], [])

    assert member.nik == "32010101"


def test_merge_drops_members_without_nik_or_name() -> None:
    table1 = [
        _person_row(1, Agama="ISLAM", Pekerjaan="PELAJAR"),
        _person_row(2, Nama="SITI"),
    ]

    members = merge_tables_to_members(table1, [])

    assert [m.nama for m in members] == ["SITI"]
    assert all(m.nik or m.nama for m in members)


def test_merge_reads_date_from_tanggal_column() -> None:
    (member,) = merge_tables_to_members(
        [_person_row(1, Nama="SITI", Tanggal="Lahir 02/02/1982")], []
    )

    assert member.tanggal_lahir == "02/02/1982"


def test_get_value_prefers_first_non_empty_key() -> None:
    values = {"Kelamin": "", "Jenis Kelamin": " PEREMPUAN "}

    assert get_value(values, ("Kelamin", "Jenis Kelamin")) == "PEREMPUAN"
    assert get_value(values, ("Agama",)) == ""


def test_get_value_or_pattern() -> None:
    assert get_value_or_pattern({"Lahir": "BOGOR 01-01-1980"}, ("Lahir",), DATE_RE) == "01-01-1980"
    assert get_value_or_pattern({"Lahir": "1 JAN 1980"}, ("Lahir",), DATE_RE) == "1 JAN 1980"
    assert get_value_or_pattern({}, ("Lahir",), DATE_RE) == ""
