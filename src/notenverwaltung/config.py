"""
Konfiguration der Notenverwaltung.

Alle Werte sind feste Konstanten. Die Dateien liegen im aktuellen Arbeitsverzeichnis.
"""

from __future__ import annotations

import logging

# --- Dateien ---

KONTEN_DATEI = "accounts.dat"
STUDIERENDE_DATEI = "students.dat"
CSV_DATEI = "students.csv"

# --- Kapazitäten ---

MAX_KONTEN = 1000
MAX_STUDIERENDE = 2000

# --- Feldbreiten im Binärformat (inkl. abschließendem Nullbyte) ---

ID_LAENGE = 30
BENUTZERNAME_LAENGE = 50
PASSWORT_LAENGE = 50
NAME_LAENGE = 80

# --- Standard-Administrator ---

STANDARD_ADMIN_ID = "admin"
STANDARD_ADMIN_BENUTZERNAME = "admin"
STANDARD_ADMIN_PASSWORT = "admin"

# --- Logging ---

LOG_DATEI = "notenverwaltung.log"
LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def konfiguriere_logging(datei: str | None = LOG_DATEI, level: int = LOG_LEVEL) -> None:
    """
    Richtet das Logging ein.
    Es wird in eine Datei geschrieben, damit die Konsole frei für das Menü bleibt.
    Ohne Datei geht das Logging auf stderr.
    """
    if datei:
        logging.basicConfig(level=level, format=LOG_FORMAT, filename=datei, encoding="utf-8")
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)
