"""
Kontenspeicher

Hält alle Login-Konten im Speicher und schreibt nach jeder Änderung die komplette Datei neu.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .config import BENUTZERNAME_LAENGE, ID_LAENGE, MAX_KONTEN, PASSWORT_LAENGE
from .domain import Konto, kuerze_text
from .fehler import (
    AnmeldeFehler,
    AnmeldeGrund,
    DoppelteIdFehler,
    DoppelterBenutzernameFehler,
    KapazitaetUeberschrittenFehler,
    NichtGefundenFehler,
)
from .persistence import KontenRepository

logger = logging.getLogger(__name__)


class KontenSpeicher:
    """
    Speicher für Konten.
    - Reihenfolge = Reihenfolge des Anlegens.
    - id und Benutzername sind jeweils eindeutig.
    """

    def __init__(self, repo: KontenRepository, maximum: int = MAX_KONTEN) -> None:
        self._repo = repo
        self._maximum = maximum
        self._konten: List[Konto] = []

    def lade(self) -> None:
        """Lädt alle Konten aus dem Repository."""
        self._konten = self._repo.lade()
        logger.info("%d Konten geladen.", len(self._konten))

    def speichere(self) -> bool:
        """
        Schreibt alle Konten.
        Ein Schreibfehler wird geloggt. Der Bestand im Speicher bleibt gültig.
        """
        try:
            self._repo.speichere(self._konten)
            return True
        except OSError as e:
            logger.error("Konten konnten nicht gespeichert werden: %s", e)
            return False

    def finde_nach_benutzername(self, benutzername: str) -> Optional[int]:
        """Index des Kontos mit diesem Benutzernamen oder None. Die Eingabe wird wie beim Speichern gekürzt."""
        benutzername = kuerze_text(benutzername, BENUTZERNAME_LAENGE)
        for i, k in enumerate(self._konten):
            if k.benutzername == benutzername:
                return i
        return None

    def finde_nach_id(self, id: str) -> Optional[int]:
        """Index des Kontos mit dieser id oder None."""
        id = kuerze_text(id, ID_LAENGE)
        for i, k in enumerate(self._konten):
            if k.id == id:
                return i
        return None

    def fuege_hinzu(self, konto: Konto) -> None:
        """
        Legt ein Konto an.
        Prüfreihenfolge:
        1) Kapazität
        2) id
        3) Benutzername
        """
        if self.anzahl() >= self._maximum:
            raise KapazitaetUeberschrittenFehler(self._maximum)
        if self.finde_nach_id(konto.id) is not None:
            raise DoppelteIdFehler(konto.id, "Konto")
        if self.finde_nach_benutzername(konto.benutzername) is not None:
            raise DoppelterBenutzernameFehler(konto.benutzername)

        self._konten.append(konto)
        logger.info("Konto angelegt: %s (%s)", konto.benutzername, konto.rolle.name)
        self.speichere()

    def loesche(self, id: str) -> Konto:
        """Löscht das Konto mit dieser id. Die übrigen behalten ihre Reihenfolge."""
        idx = self.finde_nach_id(id)
        if idx is None:
            raise NichtGefundenFehler(id, "Konto")

        konto = self._konten.pop(idx)
        logger.info("Konto gelöscht: %s", konto.benutzername)
        self.speichere()
        return konto

    def liste(self) -> List[Konto]:
        """Kopie aller Konten in Anlege-Reihenfolge."""
        return list(self._konten)

    def anzahl(self) -> int:
        return len(self._konten)

    def ist_leer(self) -> bool:
        return not self._konten

    def pruefe_anmeldedaten(self, benutzername: str, passwort: str) -> Konto:
        """
        Prüft Benutzername und Passwort (Klartextvergleich).
        Beide Fehlerfälle liefern dieselbe Meldung, der Grund steht in AnmeldeFehler.grund.
        Benutzername und Passwort werden auf die Feldbreiten gekürzt, wie beim Anlegen.
        """
        idx = self.finde_nach_benutzername(benutzername)
        if idx is None:
            logger.warning("Anmeldung fehlgeschlagen: unbekannter Benutzer %r", benutzername)
            raise AnmeldeFehler(AnmeldeGrund.UNBEKANNTER_BENUTZER)

        konto = self._konten[idx]
        if konto.passwort != kuerze_text(passwort, PASSWORT_LAENGE):
            logger.warning("Anmeldung fehlgeschlagen: falsches Passwort für %r", benutzername)
            raise AnmeldeFehler(AnmeldeGrund.FALSCHES_PASSWORT)

        logger.info("Anmeldung erfolgreich: %s", benutzername)
        return konto
