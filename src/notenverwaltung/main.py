"""
Entry point für die Notenverwaltung.
Dieses Modul startet die Anwendung.
"""

from __future__ import annotations

import logging
import sys

from .config import CSV_DATEI, KONTEN_DATEI, STUDIERENDE_DATEI, konfiguriere_logging
from .controller import MenueController
from .konten import KontenSpeicher
from .persistence import BinaerKontenRepository, BinaerStudierendenRepository
from .service import VerwaltungsService
from .studierende import StudierendenSpeicher
from .view import ConsoleView

logger = logging.getLogger(__name__)


def erstelle_service() -> VerwaltungsService:
    """
    Baut Speicher und Service.
    Die Dateien liegen im aktuellen Arbeitsverzeichnis.
    """
    konten = KontenSpeicher(BinaerKontenRepository(KONTEN_DATEI))
    studierende = StudierendenSpeicher(BinaerStudierendenRepository(STUDIERENDE_DATEI))
    return VerwaltungsService(konten, studierende, csv_pfad=CSV_DATEI)


def main() -> None:
    """
    Startpunkt der Anwendung.
    Ablauf:
    - Logging einrichten
    - Komponenten erstellen
    - Controller starten
    """
    konfiguriere_logging()
    service = erstelle_service()

    try:
        controller = MenueController(service, ConsoleView())
        controller.starte_app()

    except KeyboardInterrupt:
        # Sauberer Abbruch per Strg+C.
        service.speichere_alles()
        print("\nAnwendung beendet.")
        sys.exit(0)

    except Exception as e:
        # Unerwarteter Fehler.
        logger.exception("Unerwarteter Fehler")
        print(f"\nFEHLER: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
