"""
Domain beinhaltet die Entities + Enums

Dieses Modul enthält nur die Fachlogik.
Es enthält keine UI- oder Datei-Logik.

- Entities sind Dataclasses.
- Summe und CGPA werden immer berechnet und nicht gespeichert.
- Noten liegen immer im Bereich 0..100.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence, Tuple

from .config import BENUTZERNAME_LAENGE, ID_LAENGE, NAME_LAENGE, PASSWORT_LAENGE


# Reihenfolge ist fest und entspricht der Reihenfolge in Datei und CSV.
FAECHER: Tuple[str, ...] = ("DAA", "DE", "Discrete Maths", "C++ OOPS", "Coding Skills")

ANZAHL_FAECHER = len(FAECHER)
MIN_NOTE = 0
MAX_NOTE = 100
MAX_SUMME = ANZAHL_FAECHER * MAX_NOTE

# Eingabewert für "aktuelle Note behalten" beim Ändern.
BEHALTEN = -1


class Rolle(Enum):
    """Rollen eines Kontos. Der Wert ist das Rollen-Byte in der Datei."""
    Administrator = "A"
    Student = "S"


class Sortierung(Enum):
    """Mögliche Sortierschlüssel für die Studierendenliste."""
    CGPA_AUFSTEIGEND = "cgpa_aufsteigend"
    CGPA_ABSTEIGEND = "cgpa_absteigend"
    NAME_AUFSTEIGEND = "name_aufsteigend"


def berechne_summe_und_cgpa(noten: Sequence[int]) -> Tuple[int, float]:
    """
    Berechnet Summe und CGPA.
    - summe = Summe aller Noten
    - cgpa = (summe / 500.0) * 10.0, Skala 0..10
    Es wird nicht begrenzt. Gerundet wird erst bei der Ausgabe.
    """
    summe = sum(noten)
    cgpa = (float(summe) / float(MAX_SUMME)) * 10.0
    return summe, cgpa


def begrenze_note(note: int) -> int:
    """Begrenzt eine Note auf 0..100."""
    return max(MIN_NOTE, min(MAX_NOTE, note))


def kuerze_text(text: str, laenge: int) -> str:
    """
    Kürzt Text auf die Feldbreite im Dateiformat.
    - laenge ist die Breite inkl. Nullbyte, es bleiben also laenge - 1 Bytes UTF-8.
    - Zeichen werden nicht zerschnitten.
    """
    raw = text.encode("utf-8")[:laenge - 1]
    return raw.decode("utf-8", errors="ignore")


@dataclass(slots=True)
class Konto:
    """
    Ein Login-Konto.
    Das Passwort wird im Klartext gespeichert und verglichen.
    """
    rolle: Rolle
    id: str
    benutzername: str
    passwort: str

    def __post_init__(self) -> None:
        """Kürzt die Texte auf die Feldbreiten, damit Speicher und Datei übereinstimmen."""
        self.id = kuerze_text(self.id, ID_LAENGE)
        self.benutzername = kuerze_text(self.benutzername, BENUTZERNAME_LAENGE)
        self.passwort = kuerze_text(self.passwort, PASSWORT_LAENGE)

    def ist_admin(self) -> bool:
        """Abfrage ist wahr für Administratoren."""
        return self.rolle == Rolle.Administrator


@dataclass(slots=True)
class Studierendendatensatz:
    """
    Ein Datensatz mit den Noten eines Studierenden.
    - Genau 5 Noten, jeweils 0..100.
    - Die id sollte der id eines Kontos entsprechen. Das wird nicht erzwungen.
    """
    id: str
    name: str
    noten: List[int] = field(default_factory=lambda: [0] * ANZAHL_FAECHER)

    def __post_init__(self) -> None:
        """Prüft Grundregeln nach dem Erzeugen. Texte werden auf die Feldbreiten gekürzt."""
        self.id = kuerze_text(self.id, ID_LAENGE)
        self.name = kuerze_text(self.name, NAME_LAENGE)
        self.noten = list(self.noten)
        if len(self.noten) != ANZAHL_FAECHER:
            raise ValueError(
                f"Ein Datensatz braucht genau {ANZAHL_FAECHER} Noten, hat aber {len(self.noten)}."
            )
        for note in self.noten:
            if not (MIN_NOTE <= note <= MAX_NOTE):
                raise ValueError(f"note muss im Bereich {MIN_NOTE}..{MAX_NOTE} liegen, ist aber {note}.")

    @property
    def summe(self) -> int:
        """Summe aller Noten (max. 500)."""
        return berechne_summe_und_cgpa(self.noten)[0]

    @property
    def cgpa(self) -> float:
        """CGPA auf der Skala 0..10."""
        return berechne_summe_und_cgpa(self.noten)[1]

    def noten_mit_faechern(self) -> List[Tuple[str, int]]:
        """Paare aus Fachname und Note, in fester Fachreihenfolge."""
        return list(zip(FAECHER, self.noten))
