"""Tests für den VerwaltungsService."""

import pytest

from notenverwaltung.domain import Konto, Rolle, Sortierung
from notenverwaltung.fehler import (
    AnmeldeFehler,
    DoppelteIdFehler,
    DoppelterBenutzernameFehler,
    NichtGefundenFehler,
    ZugriffVerweigertFehler,
)
from notenverwaltung.konten import KontenSpeicher
from notenverwaltung.persistence import BinaerKontenRepository, BinaerStudierendenRepository
from notenverwaltung.service import VerwaltungsService
from notenverwaltung.studierende import StudierendenSpeicher


def _neuer_service(konten_pfad, studierende_pfad, csv_pfad):
    svc = VerwaltungsService(
        KontenSpeicher(BinaerKontenRepository(konten_pfad)),
        StudierendenSpeicher(BinaerStudierendenRepository(studierende_pfad)),
        csv_pfad=csv_pfad,
    )
    return svc


def test_standard_admin_beim_ersten_start(service):
    konten = service.konten_auflisten()
    assert konten == [Konto(Rolle.Administrator, "admin", "admin", "admin")]


def test_standard_admin_nur_einmal(service, konten_pfad, studierende_pfad, csv_pfad):
    zweiter = _neuer_service(konten_pfad, studierende_pfad, csv_pfad)
    assert zweiter.starte() is False
    assert len(zweiter.konten_auflisten()) == 1


def test_kein_standard_admin_wenn_konten_existieren(service, konten_pfad, studierende_pfad, csv_pfad):
    service.registrieren("s1", "anna", "pw")
    service.konto_loeschen("admin")

    zweiter = _neuer_service(konten_pfad, studierende_pfad, csv_pfad)
    zweiter.starte()
    assert [k.benutzername for k in zweiter.konten_auflisten()] == ["anna"]


def test_anmelden(service):
    konto = service.anmelden("admin", "admin")
    assert konto.ist_admin()
    with pytest.raises(AnmeldeFehler):
        service.anmelden("admin", "falsch")


def test_registrieren_legt_student_an(service):
    konto = service.registrieren("s1", "anna", "pw")
    assert konto.rolle == Rolle.Student
    assert service.anmelden("anna", "pw") == konto


def test_registrieren_doppelter_benutzername(service):
    with pytest.raises(DoppelterBenutzernameFehler):
        service.registrieren("s1", "admin", "pw")
    assert len(service.konten_auflisten()) == 1


def test_konto_hinzufuegen_mit_rolle(service):
    konto = service.konto_hinzufuegen(Rolle.Administrator, "a2", "chef", "pw")
    assert konto.ist_admin()


def test_stelle_admin_sicher(service):
    service.stelle_admin_sicher(service.anmelden("admin", "admin"))
    student = service.registrieren("s1", "anna", "pw")
    with pytest.raises(ZugriffVerweigertFehler):
        service.stelle_admin_sicher(student)


def test_datensatz_ohne_konto_gibt_hinweis(service):
    ergebnis = service.studierenden_hinzufuegen("s9", "Niemand", [10, 20, 30, 40, 50])
    assert ergebnis.ohne_konto is True
    assert service.anzahl_datensaetze() == 1


def test_datensatz_mit_konto(service):
    service.registrieren("s1", "anna", "pw")
    ergebnis = service.studierenden_hinzufuegen("s1", "Anna", [80, 90, 70, 60, 100])
    assert ergebnis.ohne_konto is False
    assert ergebnis.datensatz.summe == 400


def test_eigenen_datensatz_anzeigen(service):
    konto = service.registrieren("s1", "anna", "pw")
    with pytest.raises(NichtGefundenFehler):
        service.eigenen_datensatz_anzeigen(konto)

    service.studierenden_hinzufuegen("s1", "Anna", [80, 90, 70, 60, 100])
    assert service.eigenen_datensatz_anzeigen(konto).name == "Anna"


def test_verwaltung_und_auswertungen(service):
    service.studierenden_hinzufuegen("s1", "B", [80, 90, 70, 60, 100])
    service.studierenden_hinzufuegen("s2", "a", [50, 50, 50, 50, 50])

    service.studierenden_aendern("s2", [100, -1, -1, -1, -1])
    assert service.studierenden_anzeigen("s2").summe == 300

    assert service.durchschnitt_cgpa() == pytest.approx((8.0 + 6.0) / 2)
    hoch, niedrig = service.hoechster_und_niedrigster()
    assert (hoch.id, niedrig.id) == ("s1", "s2")

    service.sortiere(Sortierung.NAME_AUFSTEIGEND)
    assert [s.id for s in service.studierende_auflisten()] == ["s2", "s1"]

    service.studierenden_loeschen("s1")
    assert service.anzahl_datensaetze() == 1


def test_export_standardpfad(service, csv_pfad):
    service.studierenden_hinzufuegen("s1", "Anna", [80, 90, 70, 60, 100])
    assert service.exportiere_csv() == 1
    assert service.csv_pfad == csv_pfad
    with open(csv_pfad, encoding="utf-8") as f:
        assert f.read().count("\n") == 2


def test_speichere_alles_vor_dem_laden_schreibt_nichts(tmp_path):
    pfad = tmp_path / "accounts.dat"
    pfad.write_bytes(b"unveraendert")
    svc = _neuer_service(str(pfad), str(tmp_path / "students.dat"), str(tmp_path / "x.csv"))

    svc.speichere_alles()

    assert pfad.read_bytes() == b"unveraendert"
    assert not (tmp_path / "students.dat").exists()


def test_speichere_alles_nach_dem_laden(service, studierende_pfad):
    service.speichere_alles()
    with open(studierende_pfad, "rb") as f:
        assert f.read() == b"\x00\x00\x00\x00"


def test_langes_passwort_anmeldung_nach_neustart(service, konten_pfad, studierende_pfad, csv_pfad):
    service.registrieren("s1", "anna", "p" * 60)

    zweiter = _neuer_service(konten_pfad, studierende_pfad, csv_pfad)
    zweiter.starte()
    assert zweiter.anmelden("anna", "p" * 60).id == "s1"


def test_lange_ids_nach_neustart_eindeutig(service, konten_pfad, studierende_pfad, csv_pfad):
    service.registrieren("x" * 29 + "A", "anna", "pw")
    with pytest.raises(DoppelteIdFehler):
        service.registrieren("x" * 29 + "B", "ben", "pw")

    zweiter = _neuer_service(konten_pfad, studierende_pfad, csv_pfad)
    zweiter.starte()
    ids = [k.id for k in zweiter.konten_auflisten()]
    assert len(ids) == len(set(ids)) == 2
