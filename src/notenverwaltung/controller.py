"""
Controller layer

Der MenueController steuert die App. Er verbindet VerwaltungsService und View.

Aufgaben:
- Hauptmenü (Anmelden, Registrieren, Beenden)
- Administrator-Menü und Student-Menü
- Eingaben lesen und an den Service weitergeben
- Fehler des Service als Meldung anzeigen
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .domain import BEHALTEN, FAECHER, MAX_NOTE, MIN_NOTE, Konto, Rolle, Sortierung
from .fehler import NotenverwaltungFehler
from .service import VerwaltungsService
from .view import ADMIN_MENUE, HAUPTMENUE, SORTIER_MENUE, STUDENT_MENUE, ConsoleView

logger = logging.getLogger(__name__)


class MenueController:
    """
    Hauptcontroller für die Notenverwaltung.

    Aufgaben:
    - Menü-Schleifen
    - Aufrufe an Service und View
    """

    def __init__(self, service: VerwaltungsService, view: ConsoleView) -> None:
        """
        Erstellt den Controller.

        - service: alle Anwendungsfälle
        - view: Ein-/Ausgabe
        """
        self._service = service
        self._view = view

    def starte_app(self) -> None:
        """
        Startet die Anwendung.

        - Daten laden
        - Standard-Administrator anlegen, falls keine Konten existieren
        - Hauptmenü-Schleife starten
        """
        if self._service.starte():
            self._view.show_message("Standard-Administrator angelegt -> Benutzername: admin  Passwort: admin")

        # Endlosschleife bis Beenden.
        while True:
            self._view.render_menue("NOTENVERWALTUNG", HAUPTMENUE)
            choice = self._view.prompt("Auswahl: ").strip()

            if choice == "1":
                self.anmelden()
            elif choice == "2":
                self.registrieren()
            elif choice == "3":
                self._beenden()
                break
            else:
                self._view.show_message("Ungültige Auswahl.")

            self._view.warte_auf_enter()

    def anmelden(self) -> None:
        """Login. Danach wird je nach Rolle das passende Menü gezeigt."""
        benutzername = self._view.prompt("Benutzername: ").strip()
        passwort = self._view.prompt_passwort("Passwort: ")

        try:
            konto = self._service.anmelden(benutzername, passwort)
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return

        if konto.rolle == Rolle.Administrator:
            self.admin_menue(konto)
        else:
            self.student_menue(konto)

    def registrieren(self) -> None:
        """Registrierung als neuer Student."""
        self._view.show_message("Registrierung als neuer Student")
        id = self._view.prompt("Eindeutige id (z.B. Matrikelnummer): ").strip()
        benutzername = self._view.prompt("Benutzername: ").strip()
        passwort = self._view.prompt_passwort("Passwort: ")

        self._ausfuehren(
            lambda: self._service.registrieren(id, benutzername, passwort),
            "Student-Konto angelegt. Sie können sich jetzt anmelden.",
        )

    def admin_menue(self, konto: Konto) -> None:
        """Menü-Schleife für Administratoren."""
        try:
            self._service.stelle_admin_sicher(konto)
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return

        aktionen = {
            "1": self.konto_anlegen,
            "2": self.konto_loeschen,
            "3": self.konten_auflisten,
            "4": self.datensatz_anlegen,
            "5": self.datensatz_aendern,
            "6": self.datensatz_loeschen,
            "7": self.datensatz_anzeigen,
            "8": self.studierende_auflisten,
            "9": self.durchschnitt_anzeigen,
            "10": self.anzahl_anzeigen,
            "11": self.hoechster_und_niedrigster,
            "12": self.sortieren,
            "13": self.exportieren,
        }

        while True:
            self._view.render_menue(f"ADMIN ({konto.benutzername})", ADMIN_MENUE)
            choice = self._view.prompt("Auswahl: ").strip()

            if choice == "14":
                return

            aktion = aktionen.get(choice)
            if aktion is None:
                self._view.show_message("Ungültige Auswahl.")
            else:
                aktion()

            self._view.warte_auf_enter()

    def student_menue(self, konto: Konto) -> None:
        """Menü-Schleife für Studierende."""
        while True:
            self._view.render_menue(f"STUDENT ({konto.benutzername})", STUDENT_MENUE)
            choice = self._view.prompt("Auswahl: ").strip()

            if choice == "1":
                try:
                    self._view.render_datensatz(self._service.eigenen_datensatz_anzeigen(konto))
                except NotenverwaltungFehler:
                    self._view.show_message(f"Kein Datensatz für Ihre id ({konto.id}) gefunden.")
            elif choice == "2":
                return
            else:
                self._view.show_message("Ungültige Auswahl.")

            self._view.warte_auf_enter()

    # --- Konten ---

    def konto_anlegen(self) -> None:
        """Fragt Rolle, id, Benutzername und Passwort ab."""
        raw = self._view.prompt("Rolle (A = Administrator / S = Student): ").strip().upper()
        rolle = self._parse_rolle(raw)
        if rolle is None:
            self._view.show_message("Ungültige Rolle.")
            return

        id = self._view.prompt("Eindeutige id: ").strip()
        benutzername = self._view.prompt("Benutzername: ").strip()
        passwort = self._view.prompt_passwort("Passwort: ")

        self._ausfuehren(
            lambda: self._service.konto_hinzufuegen(rolle, id, benutzername, passwort),
            "Konto erfolgreich angelegt.",
        )

    def konto_loeschen(self) -> None:
        id = self._view.prompt("id des zu löschenden Kontos: ").strip()
        self._ausfuehren(lambda: self._service.konto_loeschen(id), "Konto gelöscht.")

    def konten_auflisten(self) -> None:
        konten = self._service.konten_auflisten()
        if not konten:
            self._view.show_message("Keine Konten.")
            return
        self._view.render_konten(konten)

    # --- Datensätze ---

    def datensatz_anlegen(self) -> None:
        """
        Legt einen Datensatz an.
        Ungültige Noten-Eingaben zählen als 0, Werte außerhalb 0..100 werden begrenzt.
        """
        id = self._view.prompt("id (sollte der Konto-id entsprechen): ").strip()
        name = self._view.prompt("Name: ").strip()

        noten = []
        for fach in FAECHER:
            wert = self._parse_int(self._view.prompt(f"Note für {fach} ({MIN_NOTE}-{MAX_NOTE}): "))
            noten.append(0 if wert is None else wert)

        try:
            ergebnis = self._service.studierenden_hinzufuegen(id, name, noten)
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return

        if ergebnis.ohne_konto:
            self._view.show_message("Hinweis: Es gibt kein Konto mit dieser id. Bei Bedarf zuerst ein Konto anlegen.")
        s = ergebnis.datensatz
        self._view.show_message(f"Datensatz angelegt. Summe={s.summe} CGPA={s.cgpa:.2f}")

    def datensatz_aendern(self) -> None:
        """
        Ändert die Noten.
        -1 oder eine ungültige Eingabe behält die aktuelle Note.
        """
        id = self._view.prompt("id des zu ändernden Datensatzes: ").strip()
        try:
            s = self._service.studierenden_anzeigen(id)
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return

        self._view.show_message(f"Ändere Datensatz von {s.name} ({s.id})")
        neue_noten: List[Optional[int]] = []
        for fach, note in s.noten_mit_faechern():
            raw = self._view.prompt(f"{fach} aktuell = {note}. Neue Note ({BEHALTEN} = behalten): ")
            wert = self._parse_int(raw)
            neue_noten.append(BEHALTEN if wert is None else wert)

        try:
            s = self._service.studierenden_aendern(id, neue_noten)
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return
        self._view.show_message(f"Datensatz aktualisiert. Summe={s.summe} CGPA={s.cgpa:.2f}")

    def datensatz_loeschen(self) -> None:
        id = self._view.prompt("id des zu löschenden Datensatzes: ").strip()
        self._ausfuehren(lambda: self._service.studierenden_loeschen(id), "Datensatz gelöscht.")

    def datensatz_anzeigen(self) -> None:
        id = self._view.prompt("id: ").strip()
        try:
            self._view.render_datensatz(self._service.studierenden_anzeigen(id))
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))

    def studierende_auflisten(self) -> None:
        datensaetze = self._service.studierende_auflisten()
        if not datensaetze:
            self._view.show_message("Keine Studierenden.")
            return
        self._view.render_studierende(datensaetze)

    # --- Auswertungen ---

    def durchschnitt_anzeigen(self) -> None:
        try:
            avg = self._service.durchschnitt_cgpa()
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return
        self._view.show_message(
            f"\nAnzahl Studierende: {self._service.anzahl_datensaetze()}\n"
            f"Durchschnitts-CGPA aller Studierenden = {avg:.2f}"
        )

    def anzahl_anzeigen(self) -> None:
        self._view.show_message(f"\nAnzahl gespeicherter Datensätze = {self._service.anzahl_datensaetze()}")

    def hoechster_und_niedrigster(self) -> None:
        try:
            hoch, niedrig = self._service.hoechster_und_niedrigster()
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return
        self._view.render_datensatz(hoch, "Höchster CGPA")
        self._view.render_datensatz(niedrig, "Niedrigster CGPA")

    def sortieren(self) -> None:
        """Sortier-Untermenü. Die neue Reihenfolge wird gespeichert."""
        self._view.render_menue("SORTIEREN", SORTIER_MENUE)
        choice = self._view.prompt("Auswahl: ").strip()

        optionen = {
            "1": (Sortierung.CGPA_AUFSTEIGEND, "Nach CGPA (aufsteigend) sortiert und gespeichert."),
            "2": (Sortierung.CGPA_ABSTEIGEND, "Nach CGPA (absteigend) sortiert und gespeichert."),
            "3": (Sortierung.NAME_AUFSTEIGEND, "Nach Name (A-Z) sortiert und gespeichert."),
        }
        if choice not in optionen:
            self._view.show_message("Ungültige Sortier-Option.")
            return

        schluessel, meldung = optionen[choice]
        self._ausfuehren(lambda: self._service.sortiere(schluessel), meldung)

    def exportieren(self) -> None:
        try:
            anzahl = self._service.exportiere_csv()
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return
        self._view.show_message(f"{anzahl} Datensätze nach {self._service.csv_pfad} exportiert.")

    # --- Hilfsfunktionen ---

    def _ausfuehren(self, aktion, erfolg: str) -> bool:
        """
        Führt eine Service-Aktion aus.
        Bei Fehler wird die Meldung gezeigt, sonst der Erfolgstext.
        """
        try:
            aktion()
        except NotenverwaltungFehler as e:
            self._view.show_message(str(e))
            return False
        self._view.show_message(erfolg)
        return True

    def _parse_int(self, raw: str) -> Optional[int]:
        """Liest eine ganze Zahl. None bei ungültiger Eingabe."""
        try:
            return int(raw.strip())
        except ValueError:
            return None

    def _parse_rolle(self, raw: str) -> Optional[Rolle]:
        for r in Rolle:
            if r.value == raw:
                return r
        return None

    def _beenden(self) -> None:
        """
        Beendet das Programm.
        Beide Bestände werden noch einmal geschrieben.
        """
        self._service.speichere_alles()
        logger.info("Anwendung beendet.")
        self._view.show_message("Programm wird beendet. Auf Wiedersehen!")
