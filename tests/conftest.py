"""Gemeinsame Fixtures für die Tests."""

from __future__ import annotations

from typing import List

import pytest

from notenverwaltung.konten import KontenSpeicher
from notenverwaltung.persistence import BinaerKontenRepository, BinaerStudierendenRepository
from notenverwaltung.service import VerwaltungsService
from notenverwaltung.studierende import StudierendenSpeicher


@pytest.fixture
def konten_pfad(tmp_path):
    return str(tmp_path / "accounts.dat")


@pytest.fixture
def studierende_pfad(tmp_path):
    return str(tmp_path / "students.dat")


@pytest.fixture
def csv_pfad(tmp_path):
    return str(tmp_path / "students.csv")


@pytest.fixture
def konten(konten_pfad):
    speicher = KontenSpeicher(BinaerKontenRepository(konten_pfad))
    speicher.lade()
    return speicher


@pytest.fixture
def studierende(studierende_pfad):
    speicher = StudierendenSpeicher(BinaerStudierendenRepository(studierende_pfad))
    speicher.lade()
    return speicher


@pytest.fixture
def service(konten_pfad, studierende_pfad, csv_pfad):
    svc = VerwaltungsService(
        KontenSpeicher(BinaerKontenRepository(konten_pfad)),
        StudierendenSpeicher(BinaerStudierendenRepository(studierende_pfad)),
        csv_pfad=csv_pfad,
    )
    svc.starte()
    return svc


class FakeView:
    """
    View für Tests.
    Eingaben kommen aus einer Liste, Ausgaben werden gesammelt.
    """

    def __init__(self, eingaben: List[str]) -> None:
        self._eingaben = list(eingaben)
        self.ausgaben: List[str] = []
        self.datensaetze = []

    def prompt(self, frage: str) -> str:
        return self._eingaben.pop(0)

    def prompt_passwort(self, frage: str) -> str:
        return self._eingaben.pop(0)

    def show_message(self, text: str) -> None:
        self.ausgaben.append(text)

    def render_menue(self, titel, eintraege) -> None:
        pass

    def render_datensatz(self, s, titel: str = "Studierenden-Bericht") -> None:
        self.datensaetze.append((titel, s))

    def render_studierende(self, datensaetze) -> None:
        self.ausgaben.extend(s.id for s in datensaetze)

    def render_konten(self, konten) -> None:
        self.ausgaben.extend(k.benutzername for k in konten)

    def warte_auf_enter(self) -> None:
        pass

    def text(self) -> str:
        return "\n".join(self.ausgaben)


@pytest.fixture
def fake_view():
    """Fabrik für FakeView mit vorgegebenen Eingaben."""
    return FakeView
