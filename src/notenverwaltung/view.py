"""
UI layer für die Console

Diese View zeigt Menüs und Datensätze in der Konsole.
- Text formatieren und ausgeben
- Eingaben lesen
- Menüs als ASCII-Box anzeigen
"""

from __future__ import annotations

import getpass
import shutil
from typing import List, Sequence

from .domain import MAX_NOTE, MAX_SUMME, Konto, Studierendendatensatz

HAUPTMENUE = [
    "1) Anmelden",
    "2) Registrieren (Student)",
    "3) Beenden",
]

ADMIN_MENUE = [
    " 1) Konto anlegen",
    " 2) Konto löschen",
    " 3) Konten auflisten",
    " 4) Datensatz anlegen",
    " 5) Datensatz ändern",
    " 6) Datensatz löschen",
    " 7) Datensatz anzeigen",
    " 8) Alle Studierenden auflisten",
    " 9) Durchschnitts-CGPA",
    "10) Anzahl gespeicherter Datensätze",
    "11) Höchster & niedrigster CGPA",
    "12) Sortieren",
    "13) Export als CSV",
    "14) Abmelden",
]

STUDENT_MENUE = [
    "1) Eigenen Datensatz anzeigen",
    "2) Abmelden",
]

SORTIER_MENUE = [
    "1) CGPA aufsteigend",
    "2) CGPA absteigend",
    "3) Name (A-Z)",
]


class ConsoleView:
    """
    View für die Konsole.

    Die Breite der Menü-Boxen richtet sich nach der Breite des aktuellen Fensters.
    """

    def __init__(self, width: int | None = None) -> None:
        """
        Erstellt die View.
        - Wenn width None ist, wird die Terminal-Breite genutzt.
        - Menüs werden nie breiter als 60 Zeichen.
        """
        term_cols = shutil.get_terminal_size(fallback=(80, 24)).columns
        if width is None:
            width = term_cols
        self._width = max(30, min(width, 60))

    def render_menue(self, titel: str, eintraege: Sequence[str]) -> None:
        """Zeigt ein Menü als Box."""
        print(self._box(titel, eintraege))

    def render_datensatz(self, s: Studierendendatensatz, titel: str = "Studierenden-Bericht") -> None:
        """Zeigt einen Datensatz mit allen Fächern."""
        print(self._build_datensatz(s, titel))

    def render_studierende(self, datensaetze: Sequence[Studierendendatensatz]) -> None:
        """Zeigt alle Datensätze als Liste."""
        for i, s in enumerate(datensaetze, 1):
            print(f"{i}) {s.id} | {s.name} | Summe={s.summe} | CGPA={s.cgpa:.2f}")

    def render_konten(self, konten: Sequence[Konto]) -> None:
        """Zeigt alle Konten (ohne Passwort)."""
        print("\nKonten:")
        for i, k in enumerate(konten, 1):
            print(f"{i}) id: {k.id} | Benutzername: {k.benutzername} | Rolle: {k.rolle.value}")

    def prompt(self, frage: str) -> str:
        """
        Fragt den Nutzer nach Eingabe.
        """
        return input(frage)

    def prompt_passwort(self, frage: str) -> str:
        """Fragt ein Passwort ab, ohne es anzuzeigen."""
        return getpass.getpass(frage)

    def show_message(self, text: str) -> None:
        """
        Gibt eine Nachricht aus.
        """
        print(text)

    def warte_auf_enter(self) -> None:
        """Pause bis der Nutzer Enter drückt."""
        input("\nWeiter mit Enter...")

    def _build_datensatz(self, s: Studierendendatensatz, titel: str) -> str:
        """
        Baut die Anzeige eines Datensatzes als Text.
        """
        lines: List[str] = [f"\n--- {titel} ---", f"ID: {s.id}", f"Name: {s.name}"]
        for fach, note in s.noten_mit_faechern():
            lines.append(f"{fach}: {note}/{MAX_NOTE}")
        lines.append(f"Summe: {s.summe}/{MAX_SUMME}")
        lines.append(f"CGPA (von 10): {s.cgpa:.2f}")
        return "\n".join(lines)

    def _box(self, titel: str, eintraege: Sequence[str]) -> str:
        """
        Baut eine Box mit Rahmen.
        - Zu langer Text wird gekürzt.
        - Zu kurzer Text wird aufgefüllt.
        """
        inner = self._width - 2
        lines = [
            "",
            "╔" + "═" * inner + "╗",
            "║" + titel[:inner].center(inner) + "║",
            "╠" + "═" * inner + "╣",
        ]
        for e in eintraege:
            lines.append("║" + f"  {e}"[:inner].ljust(inner) + "║")
        lines.append("╚" + "═" * inner + "╝")
        return "\n".join(lines)
