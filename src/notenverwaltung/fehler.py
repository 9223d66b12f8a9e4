"""
Fehlerklassen der Notenverwaltung.

Alle Fehler sind vom Nutzer behebbar. Die Meldung ist direkt für die Anzeige gedacht.
"""

from __future__ import annotations

from enum import Enum


class NotenverwaltungFehler(Exception):
    """Basisklasse für alle fachlichen Fehler."""

    pass


class DoppelteIdFehler(NotenverwaltungFehler):
    """Es existiert bereits ein Eintrag mit dieser id."""

    def __init__(self, id: str, was: str = "Eintrag"):
        self.id = id
        super().__init__(f"{was} mit der id '{id}' existiert bereits.")


class DoppelterBenutzernameFehler(NotenverwaltungFehler):
    """Der Benutzername ist bereits vergeben."""

    def __init__(self, benutzername: str):
        self.benutzername = benutzername
        super().__init__(f"Benutzername '{benutzername}' ist bereits vergeben.")


class NichtGefundenFehler(NotenverwaltungFehler):
    """Zu der id gibt es keinen Eintrag."""

    def __init__(self, id: str, was: str = "Eintrag"):
        self.id = id
        super().__init__(f"{was} mit der id '{id}' nicht gefunden.")


class KapazitaetUeberschrittenFehler(NotenverwaltungFehler):
    """Der Speicher hat seine maximale Größe erreicht."""

    def __init__(self, maximum: int):
        self.maximum = maximum
        super().__init__(f"Speicher voll (maximal {maximum} Einträge).")


class KeineDatensaetzeFehler(NotenverwaltungFehler):
    """Die Operation braucht mindestens einen Datensatz."""

    def __init__(self):
        super().__init__("Keine Studierenden-Datensätze vorhanden.")


class ZuWenigeDatensaetzeFehler(NotenverwaltungFehler):
    """Zum Sortieren werden mindestens zwei Datensätze gebraucht."""

    def __init__(self, anzahl: int):
        self.anzahl = anzahl
        super().__init__("Zu wenige Datensätze zum Sortieren.")


class AnmeldeGrund(Enum):
    """Interner Grund für eine fehlgeschlagene Anmeldung."""
    UNBEKANNTER_BENUTZER = "unbekannter_benutzer"
    FALSCHES_PASSWORT = "falsches_passwort"


class AnmeldeFehler(NotenverwaltungFehler):
    """
    Anmeldung fehlgeschlagen.
    Die Meldung unterscheidet nicht zwischen unbekanntem Benutzer und falschem Passwort.
    Der Grund steht nur im Attribut grund.
    """

    def __init__(self, grund: AnmeldeGrund):
        self.grund = grund
        super().__init__("Ungültiger Benutzername oder Passwort.")


class ZugriffVerweigertFehler(NotenverwaltungFehler):
    """Die Operation ist nur für Administratoren erlaubt."""

    def __init__(self, benutzername: str):
        self.benutzername = benutzername
        super().__init__(f"Keine Berechtigung für '{benutzername}'.")


class SpeicherFehler(NotenverwaltungFehler):
    """Eine Datei konnte nicht geschrieben werden."""

    def __init__(self, pfad: str, ursache: Exception):
        self.pfad = pfad
        self.ursache = ursache
        super().__init__(f"Datei '{pfad}' konnte nicht geschrieben werden: {ursache}")
