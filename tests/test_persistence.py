"""Tests für das Binärformat, die Repositories und den CSV-Export."""

import struct

import pytest

from notenverwaltung.domain import Konto, Rolle, Studierendendatensatz
from notenverwaltung.fehler import SpeicherFehler
from notenverwaltung.persistence import (
    KONTO_FORMAT,
    STUDIERENDE_FORMAT,
    BinaerKontenRepository,
    BinaerSerializer,
    BinaerStudierendenRepository,
    CsvExporter,
)


def test_feste_datensatzgroessen():
    # Entspricht sizeof(Account) und sizeof(Student) des C-Programms auf x86-64.
    assert KONTO_FORMAT.size == 131
    assert STUDIERENDE_FORMAT.size == 140


def test_fehlende_datei_ist_leerer_bestand(tmp_path):
    assert BinaerKontenRepository(str(tmp_path / "fehlt.dat")).lade() == []
    assert BinaerStudierendenRepository(str(tmp_path / "fehlt.dat")).lade() == []


def test_konten_speichern_und_laden(tmp_path):
    pfad = str(tmp_path / "accounts.dat")
    konten = [
        Konto(Rolle.Administrator, "admin", "admin", "admin"),
        Konto(Rolle.Student, "s-01", "anna", "geheim"),
        Konto(Rolle.Student, "s-02", "jörg", "pässwort"),
    ]
    repo = BinaerKontenRepository(pfad)
    repo.speichere(konten)

    assert BinaerKontenRepository(pfad).lade() == konten


def test_studierende_speichern_und_laden(tmp_path):
    pfad = str(tmp_path / "students.dat")
    datensaetze = [
        Studierendendatensatz("s-01", "Anna Schmidt", [80, 90, 70, 60, 100]),
        Studierendendatensatz("s-02", "Ben", [0, 0, 0, 0, 0]),
        Studierendendatensatz("s-03", "Çelik", [100, 100, 100, 100, 100]),
    ]
    BinaerStudierendenRepository(pfad).speichere(datensaetze)

    geladen = BinaerStudierendenRepository(pfad).lade()
    assert geladen == datensaetze
    assert [s.summe for s in geladen] == [400, 0, 500]


def test_dateiinhalt_hat_anzahl_und_feste_breite(tmp_path):
    pfad = tmp_path / "students.dat"
    BinaerStudierendenRepository(str(pfad)).speichere([
        Studierendendatensatz("x", "Y", [80, 90, 70, 60, 100]),
    ])
    raw = pfad.read_bytes()
    assert len(raw) == 4 + 140
    assert struct.unpack_from("<i", raw, 0) == (1,)

    werte = STUDIERENDE_FORMAT.unpack_from(raw, 4)
    assert werte[0].rstrip(b"\0") == b"x"
    assert werte[2:7] == (80, 90, 70, 60, 100)
    assert werte[7] == 400
    assert werte[8] == pytest.approx(8.0)


def test_liest_datei_im_c_layout(tmp_path):
    pfad = tmp_path / "accounts.dat"
    raw = struct.pack("<i", 1) + struct.pack(
        "<c30s50s50s", b"S", b"1001", b"maria", b"pw"
    )
    pfad.write_bytes(raw)

    assert BinaerKontenRepository(str(pfad)).lade() == [Konto(Rolle.Student, "1001", "maria", "pw")]


def test_gekuerzte_datei_liefert_vollstaendige_datensaetze(tmp_path):
    pfad = tmp_path / "students.dat"
    BinaerStudierendenRepository(str(pfad)).speichere([
        Studierendendatensatz("a", "A", [1, 2, 3, 4, 5]),
        Studierendendatensatz("b", "B", [5, 4, 3, 2, 1]),
    ])
    raw = pfad.read_bytes()
    pfad.write_bytes(raw[:-10])

    geladen = BinaerStudierendenRepository(str(pfad)).lade()
    assert [s.id for s in geladen] == ["a"]


def test_zu_kurze_datei_ist_leer(tmp_path):
    pfad = tmp_path / "accounts.dat"
    pfad.write_bytes(b"\x01\x00")
    assert BinaerKontenRepository(str(pfad)).lade() == []


def test_lange_texte_werden_gekuerzt():
    serializer = BinaerSerializer()
    raw = serializer.konten_to_bytes([Konto(Rolle.Student, "i" * 100, "u" * 100, "p" * 100)])
    konto = serializer.konten_from_bytes(raw)[0]
    assert konto.id == "i" * 29
    assert konto.benutzername == "u" * 49
    assert konto.passwort == "p" * 49


def test_unbekannte_rolle_wird_student():
    raw = struct.pack("<i", 1) + KONTO_FORMAT.pack(b"X", b"id", b"name", b"pw")
    assert BinaerSerializer().konten_from_bytes(raw)[0].rolle == Rolle.Student


def test_csv_format():
    text = CsvExporter().to_csv([
        Studierendendatensatz("s-01", "Anna", [80, 90, 70, 60, 100]),
        Studierendendatensatz("s-02", 'Ben "B"', [0, 0, 0, 0, 1]),
    ])
    assert text.splitlines() == [
        "ID,Name,DAA,DE,DiscreteMaths,CPP_OOPS,CodingSkills,Total,CGPA",
        '"s-01","Anna",80,90,70,60,100,400,8.00',
        '"s-02","Ben ""B""",0,0,0,0,1,1,0.02',
    ]


def test_csv_schreibfehler(tmp_path):
    pfad = str(tmp_path / "gibt_es_nicht" / "students.csv")
    with pytest.raises(SpeicherFehler):
        CsvExporter().exportiere(pfad, [Studierendendatensatz("a", "A", [1, 2, 3, 4, 5])])
