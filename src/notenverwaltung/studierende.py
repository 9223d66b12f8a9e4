"""
Studierendenspeicher

Hält alle Studierenden-Datensätze im Speicher.
- Änderungen werden sofort komplett in die Datei geschrieben.
- Sortieren ändert die gespeicherte Reihenfolge dauerhaft.
- Auswertungen (Durchschnitt, Anzahl, Höchster/Niedrigster) lesen nur.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from .config import ID_LAENGE, MAX_STUDIERENDE
from .domain import (
    MAX_NOTE,
    MIN_NOTE,
    Sortierung,
    Studierendendatensatz,
    begrenze_note,
    kuerze_text,
)
from .fehler import (
    DoppelteIdFehler,
    KapazitaetUeberschrittenFehler,
    KeineDatensaetzeFehler,
    NichtGefundenFehler,
    ZuWenigeDatensaetzeFehler,
)
from .persistence import CsvExporter, StudierendenRepository

logger = logging.getLogger(__name__)


class StudierendenSpeicher:
    """
    Speicher für Studierenden-Datensätze.
    Die id ist eindeutig. Die Reihenfolge ist die Anlege-Reihenfolge bzw. die letzte Sortierung.
    """

    def __init__(
        self,
        repo: StudierendenRepository,
        exporter: Optional[CsvExporter] = None,
        maximum: int = MAX_STUDIERENDE
    ) -> None:
        self._repo = repo
        self._exporter = exporter or CsvExporter()
        self._maximum = maximum
        self._datensaetze: List[Studierendendatensatz] = []

    def lade(self) -> None:
        """Lädt alle Datensätze aus dem Repository."""
        self._datensaetze = self._repo.lade()
        logger.info("%d Studierenden-Datensätze geladen.", len(self._datensaetze))

    def speichere(self) -> bool:
        """
        Schreibt alle Datensätze.
        Ein Schreibfehler wird geloggt. Der Bestand im Speicher bleibt gültig.
        """
        try:
            self._repo.speichere(self._datensaetze)
            return True
        except OSError as e:
            logger.error("Studierende konnten nicht gespeichert werden: %s", e)
            return False

    def finde_nach_id(self, id: str) -> Optional[int]:
        """Index des Datensatzes mit dieser id oder None. Die id wird auf die Feldbreite gekürzt."""
        id = kuerze_text(id, ID_LAENGE)
        for i, s in enumerate(self._datensaetze):
            if s.id == id:
                return i
        return None

    def hole(self, id: str) -> Studierendendatensatz:
        """Liefert den Datensatz zu einer id."""
        idx = self.finde_nach_id(id)
        if idx is None:
            raise NichtGefundenFehler(id, "Studierender")
        return self._datensaetze[idx]

    def fuege_hinzu(self, id: str, name: str, noten: Sequence[int]) -> Studierendendatensatz:
        """
        Legt einen Datensatz an.
        - Noten werden auf 0..100 begrenzt.
        - Summe und CGPA ergeben sich aus den Noten.
        """
        if self.anzahl() >= self._maximum:
            raise KapazitaetUeberschrittenFehler(self._maximum)
        if self.finde_nach_id(id) is not None:
            raise DoppelteIdFehler(id, "Studierender")

        datensatz = Studierendendatensatz(
            id=id,
            name=name,
            noten=[begrenze_note(n) for n in noten],
        )
        self._datensaetze.append(datensatz)
        logger.info("Datensatz angelegt: %s (Summe=%d, CGPA=%.2f)", id, datensatz.summe, datensatz.cgpa)
        self.speichere()
        return datensatz

    def aendere(self, id: str, neue_noten: Sequence[Optional[int]]) -> Studierendendatensatz:
        """
        Ändert die Noten eines Datensatzes.
        Pro Fach wird nur ein Wert im Bereich 0..100 übernommen.
        Alles andere (z.B. -1 oder None) behält die aktuelle Note.
        """
        datensatz = self.hole(id)

        for i, note in enumerate(neue_noten[:len(datensatz.noten)]):
            if note is not None and MIN_NOTE <= note <= MAX_NOTE:
                datensatz.noten[i] = note

        logger.info("Datensatz geändert: %s (Summe=%d, CGPA=%.2f)", id, datensatz.summe, datensatz.cgpa)
        self.speichere()
        return datensatz

    def loesche(self, id: str) -> Studierendendatensatz:
        """Löscht den Datensatz. Die übrigen behalten ihre Reihenfolge."""
        idx = self.finde_nach_id(id)
        if idx is None:
            raise NichtGefundenFehler(id, "Studierender")

        datensatz = self._datensaetze.pop(idx)
        logger.info("Datensatz gelöscht: %s", id)
        self.speichere()
        return datensatz

    def liste(self) -> List[Studierendendatensatz]:
        """Kopie aller Datensätze in aktueller Reihenfolge."""
        return list(self._datensaetze)

    def anzahl(self) -> int:
        return len(self._datensaetze)

    def sortiere(self, schluessel: Sortierung) -> None:
        """
        Sortiert den Bestand dauerhaft und speichert die neue Reihenfolge.
        - Namen werden ohne Beachtung der Groß-/Kleinschreibung verglichen.
        - Bei Gleichstand entscheidet die id. Absteigend ist damit genau die Umkehrung von aufsteigend.
        """
        if len(self._datensaetze) < 2:
            raise ZuWenigeDatensaetzeFehler(len(self._datensaetze))

        if schluessel == Sortierung.CGPA_AUFSTEIGEND:
            self._datensaetze.sort(key=self._cgpa_schluessel)
        elif schluessel == Sortierung.CGPA_ABSTEIGEND:
            self._datensaetze.sort(key=self._cgpa_schluessel, reverse=True)
        elif schluessel == Sortierung.NAME_AUFSTEIGEND:
            self._datensaetze.sort(key=lambda s: (s.name.lower(), s.id))
        else:
            raise ValueError(f"Unbekannte Sortierung: {schluessel}")

        logger.info("Studierende sortiert (%s).", schluessel.value)
        self.speichere()

    def exportiere_csv(self, pfad: str) -> int:
        """
        Exportiert alle Datensätze in aktueller Reihenfolge als CSV.
        Liefert die Anzahl exportierter Datensätze.
        """
        if not self._datensaetze:
            raise KeineDatensaetzeFehler()

        self._exporter.exportiere(pfad, self._datensaetze)
        logger.info("%d Datensätze nach %s exportiert.", len(self._datensaetze), pfad)
        return len(self._datensaetze)

    def durchschnitt_cgpa(self) -> float:
        """Arithmetisches Mittel aller CGPA-Werte."""
        if not self._datensaetze:
            raise KeineDatensaetzeFehler()
        return sum(s.cgpa for s in self._datensaetze) / len(self._datensaetze)

    def hoechster_und_niedrigster(self) -> Tuple[Studierendendatensatz, Studierendendatensatz]:
        """
        Datensatz mit höchstem und niedrigstem CGPA.
        Der erste Datensatz ist Startwert für beide. Verglichen wird echt größer/kleiner,
        bei Gleichstand gewinnt also der zuerst gefundene.
        """
        if not self._datensaetze:
            raise KeineDatensaetzeFehler()

        hoch = niedrig = self._datensaetze[0]
        for s in self._datensaetze[1:]:
            if s.cgpa > hoch.cgpa:
                hoch = s
            if s.cgpa < niedrig.cgpa:
                niedrig = s
        return hoch, niedrig

    @staticmethod
    def _cgpa_schluessel(s: Studierendendatensatz) -> Tuple[float, str]:
        return s.cgpa, s.id
