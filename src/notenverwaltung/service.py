"""
Application/Use-Case layer

Der VerwaltungsService verbindet Kontenspeicher und Studierendenspeicher.
Der Controller ruft nur diese Klasse auf.

- Standard-Administrator beim ersten Start
- Anmeldung und Registrierung
- Verwaltung von Konten und Studierenden-Datensätzen
- Auswertungen, Sortierung, CSV-Export
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import (
    CSV_DATEI,
    STANDARD_ADMIN_BENUTZERNAME,
    STANDARD_ADMIN_ID,
    STANDARD_ADMIN_PASSWORT,
)
from .domain import Konto, Rolle, Sortierung, Studierendendatensatz
from .fehler import ZugriffVerweigertFehler
from .konten import KontenSpeicher
from .studierende import StudierendenSpeicher

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HinzufuegeErgebnis:
    """
    Ergebnis beim Anlegen eines Datensatzes.
    ohne_konto ist ein Hinweis: zur id existiert (noch) kein Konto.
    """
    datensatz: Studierendendatensatz
    ohne_konto: bool = False


class VerwaltungsService:
    """
    Service für alle Anwendungsfälle.
    Er besitzt beide Speicher.
    """

    def __init__(self, konten: KontenSpeicher, studierende: StudierendenSpeicher, csv_pfad: str = CSV_DATEI) -> None:
        self._konten = konten
        self._studierende = studierende
        self._csv_pfad = csv_pfad
        self._geladen = False

    # --- Start / Ende ---

    def starte(self) -> bool:
        """
        Lädt beide Bestände und legt bei Bedarf den Standard-Administrator an.
        Liefert True, wenn der Administrator neu angelegt wurde.
        """
        self._konten.lade()
        self._studierende.lade()
        self._geladen = True
        return self.richte_standard_admin_ein()

    def richte_standard_admin_ein(self) -> bool:
        """
        Legt den Standard-Administrator an, aber nur wenn es noch gar kein Konto gibt.
        """
        if not self._konten.ist_leer():
            return False

        self._konten.fuege_hinzu(Konto(
            rolle=Rolle.Administrator,
            id=STANDARD_ADMIN_ID,
            benutzername=STANDARD_ADMIN_BENUTZERNAME,
            passwort=STANDARD_ADMIN_PASSWORT,
        ))
        logger.info("Standard-Administrator angelegt.")
        return True

    def speichere_alles(self) -> None:
        """
        Schreibt beide Bestände (z.B. beim Beenden).
        Vor dem Laden wird nichts geschrieben, sonst würden die Dateien geleert.
        """
        if not self._geladen:
            return
        self._konten.speichere()
        self._studierende.speichere()

    # --- Anmeldung ---

    def anmelden(self, benutzername: str, passwort: str) -> Konto:
        """Liefert das Konto oder wirft AnmeldeFehler."""
        return self._konten.pruefe_anmeldedaten(benutzername, passwort)

    def registrieren(self, id: str, benutzername: str, passwort: str) -> Konto:
        """Selbst-Registrierung. Es wird immer ein Student-Konto angelegt."""
        return self.konto_hinzufuegen(Rolle.Student, id, benutzername, passwort)

    def stelle_admin_sicher(self, konto: Konto) -> None:
        """Wirft ZugriffVerweigertFehler, wenn das Konto kein Administrator ist."""
        if not konto.ist_admin():
            raise ZugriffVerweigertFehler(konto.benutzername)

    # --- Konten (nur Administrator) ---

    def konto_hinzufuegen(self, rolle: Rolle, id: str, benutzername: str, passwort: str) -> Konto:
        konto = Konto(rolle=rolle, id=id, benutzername=benutzername, passwort=passwort)
        self._konten.fuege_hinzu(konto)
        return konto

    def konto_loeschen(self, id: str) -> Konto:
        return self._konten.loesche(id)

    def konten_auflisten(self) -> List[Konto]:
        return self._konten.liste()

    # --- Studierende (nur Administrator) ---

    def studierenden_hinzufuegen(self, id: str, name: str, noten: Sequence[int]) -> HinzufuegeErgebnis:
        """
        Legt einen Datensatz an.
        Gibt es kein Konto mit dieser id, wird trotzdem angelegt und nur ein Hinweis gesetzt.
        """
        ohne_konto = self._konten.finde_nach_id(id) is None
        datensatz = self._studierende.fuege_hinzu(id, name, noten)
        if ohne_konto:
            logger.warning("Datensatz %s angelegt, aber es gibt kein Konto mit dieser id.", id)
        return HinzufuegeErgebnis(datensatz=datensatz, ohne_konto=ohne_konto)

    def studierenden_aendern(self, id: str, neue_noten: Sequence[Optional[int]]) -> Studierendendatensatz:
        return self._studierende.aendere(id, neue_noten)

    def studierenden_loeschen(self, id: str) -> Studierendendatensatz:
        return self._studierende.loesche(id)

    def studierenden_anzeigen(self, id: str) -> Studierendendatensatz:
        return self._studierende.hole(id)

    def studierende_auflisten(self) -> List[Studierendendatensatz]:
        return self._studierende.liste()

    # --- Auswertungen ---

    def durchschnitt_cgpa(self) -> float:
        return self._studierende.durchschnitt_cgpa()

    def anzahl_datensaetze(self) -> int:
        return self._studierende.anzahl()

    def hoechster_und_niedrigster(self) -> Tuple[Studierendendatensatz, Studierendendatensatz]:
        return self._studierende.hoechster_und_niedrigster()

    def sortiere(self, schluessel: Sortierung) -> None:
        self._studierende.sortiere(schluessel)

    def exportiere_csv(self, pfad: Optional[str] = None) -> int:
        """Exportiert als CSV. Ohne Pfad wird die Standard-Datei genutzt."""
        return self._studierende.exportiere_csv(pfad or self._csv_pfad)

    @property
    def csv_pfad(self) -> str:
        return self._csv_pfad

    # --- Student ---

    def eigenen_datensatz_anzeigen(self, konto: Konto) -> Studierendendatensatz:
        """Sucht den Datensatz zur id des angemeldeten Kontos. Wirft NichtGefundenFehler."""
        return self._studierende.hole(konto.id)
