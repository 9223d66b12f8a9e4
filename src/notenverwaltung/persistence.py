"""
Persistence layer (Binär + CSV)

Hier liegt die Speicherung der beiden Bestände. Die Domain selbst bleibt frei von Datei-Details.
- KontenRepository / StudierendenRepository: Schnittstellen (lade / speichere)
- BinaerKontenRepository / BinaerStudierendenRepository: Datei-Repositories
- BinaerSerializer: Mapping zwischen Entities und festen Binär-Datensätzen
- CsvExporter: Export der Studierenden als CSV

Dateiformat (beide Dateien gleich aufgebaut):
- Anzahl der Datensätze als 32-bit Integer (little-endian)
- danach die Datensätze mit fester Breite, ohne Trennzeichen
- Texte sind UTF-8 und mit Nullbytes aufgefüllt

Fehlende Dateien sind ein leerer Bestand. Gekürzte Dateien werden nicht geprüft,
es werden nur die vollständig vorhandenen Datensätze gelesen.
"""

from __future__ import annotations

import logging
import struct
from typing import List, Optional, Protocol, Sequence

from .config import BENUTZERNAME_LAENGE, ID_LAENGE, NAME_LAENGE, PASSWORT_LAENGE
from .domain import (
    ANZAHL_FAECHER,
    Konto,
    Rolle,
    Studierendendatensatz,
    begrenze_note,
    kuerze_text,
)
from .fehler import SpeicherFehler

logger = logging.getLogger(__name__)


ANZAHL_FORMAT = struct.Struct("<i")

# rolle, id, benutzername, passwort
KONTO_FORMAT = struct.Struct(f"<c{ID_LAENGE}s{BENUTZERNAME_LAENGE}s{PASSWORT_LAENGE}s")

# id, name, 2 Füllbytes (Ausrichtung der Integer), 5 Noten, Summe, CGPA
STUDIERENDE_FORMAT = struct.Struct(f"<{ID_LAENGE}s{NAME_LAENGE}s2x{ANZAHL_FAECHER}iif")

CSV_KOPFZEILE = "ID,Name,DAA,DE,DiscreteMaths,CPP_OOPS,CodingSkills,Total,CGPA"


class KontenRepository(Protocol):
    """
    Schnittstelle für die Persistenz der Konten.
    """
    def lade(self) -> List[Konto]:
        """Lädt alle Konten."""
        ...

    def speichere(self, konten: Sequence[Konto]) -> None:
        """Speichert alle Konten."""
        ...


class StudierendenRepository(Protocol):
    """
    Schnittstelle für die Persistenz der Studierenden-Datensätze.
    """
    def lade(self) -> List[Studierendendatensatz]:
        """Lädt alle Datensätze."""
        ...

    def speichere(self, datensaetze: Sequence[Studierendendatensatz]) -> None:
        """Speichert alle Datensätze."""
        ...


class FileStorage:
    """
    Klasse für Dateihandling beim Laden und Speichern.
    - Nur lesen/schreiben.
    - Binärdateien werden komplett gelesen und komplett überschrieben.
    """

    def lese_bytes(self, pfad: str) -> bytes:
        """
        Liest eine Datei als Bytes.
        Fehlerbehandlung:
        - FileNotFoundError, wenn Datei fehlt
        - OSError bei sonstigen Leseproblemen
        """
        with open(pfad, "rb") as f:
            return f.read()

    def schreibe_bytes(self, pfad: str, content: bytes) -> None:
        """
        Schreibt Bytes in eine Datei.
        Die Datei wird vorher geleert. Es gibt kein atomares Ersetzen.
        """
        with open(pfad, "wb") as f:
            f.write(content)

    def schreibe_text(self, pfad: str, content: str) -> None:
        """
        Schreibt Text (UTF-8) in eine Datei.
        """
        with open(pfad, "w", encoding="utf-8", newline="") as f:
            f.write(content)


class BinaerSerializer:
    """
    Wandelt Konten und Datensätze <-> Bytes.
    - Rolle als einzelnes Byte ('A' / 'S').
    - Texte werden gekürzt, damit immer ein Nullbyte am Ende bleibt.
    - Summe und CGPA werden mitgeschrieben, beim Lesen aber aus den Noten neu berechnet.
    """

    def konten_to_bytes(self, konten: Sequence[Konto]) -> bytes:
        """Macht aus den Konten den kompletten Dateiinhalt."""
        teile = [ANZAHL_FORMAT.pack(len(konten))]
        for k in konten:
            teile.append(KONTO_FORMAT.pack(
                k.rolle.value.encode("ascii"),
                self._text_to_bytes(k.id, ID_LAENGE),
                self._text_to_bytes(k.benutzername, BENUTZERNAME_LAENGE),
                self._text_to_bytes(k.passwort, PASSWORT_LAENGE),
            ))
        return b"".join(teile)

    def konten_from_bytes(self, raw: bytes) -> List[Konto]:
        """Baut die Konten aus dem Dateiinhalt."""
        konten = []
        for rolle, id_raw, name_raw, passwort_raw in self._datensaetze(raw, KONTO_FORMAT):
            konten.append(Konto(
                rolle=self._parse_rolle(rolle),
                id=self._bytes_to_text(id_raw),
                benutzername=self._bytes_to_text(name_raw),
                passwort=self._bytes_to_text(passwort_raw),
            ))
        return konten

    def studierende_to_bytes(self, datensaetze: Sequence[Studierendendatensatz]) -> bytes:
        """Macht aus den Datensätzen den kompletten Dateiinhalt."""
        teile = [ANZAHL_FORMAT.pack(len(datensaetze))]
        for s in datensaetze:
            teile.append(STUDIERENDE_FORMAT.pack(
                self._text_to_bytes(s.id, ID_LAENGE),
                self._text_to_bytes(s.name, NAME_LAENGE),
                *s.noten,
                s.summe,
                s.cgpa,
            ))
        return b"".join(teile)

    def studierende_from_bytes(self, raw: bytes) -> List[Studierendendatensatz]:
        """
        Baut die Datensätze aus dem Dateiinhalt.
        Noten außerhalb 0..100 (kaputte Datei) werden begrenzt.
        """
        datensaetze = []
        for werte in self._datensaetze(raw, STUDIERENDE_FORMAT):
            id_raw, name_raw = werte[0], werte[1]
            noten = [begrenze_note(n) for n in werte[2:2 + ANZAHL_FAECHER]]
            datensaetze.append(Studierendendatensatz(
                id=self._bytes_to_text(id_raw),
                name=self._bytes_to_text(name_raw),
                noten=noten,
            ))
        return datensaetze

    def _datensaetze(self, raw: bytes, fmt: struct.Struct) -> List[tuple]:
        """
        Zerlegt den Dateiinhalt in Datensätze.
        Es werden höchstens so viele Datensätze gelesen, wie vollständig vorhanden sind.
        """
        if len(raw) < ANZAHL_FORMAT.size:
            return []

        (angegeben,) = ANZAHL_FORMAT.unpack_from(raw, 0)
        vorhanden = (len(raw) - ANZAHL_FORMAT.size) // fmt.size
        anzahl = max(0, min(angegeben, vorhanden))
        if anzahl < angegeben:
            logger.warning("Datei ist kürzer als angegeben (%d), lese %d Datensätze.", angegeben, anzahl)

        return [
            fmt.unpack_from(raw, ANZAHL_FORMAT.size + i * fmt.size)
            for i in range(anzahl)
        ]

    def _text_to_bytes(self, text: str, laenge: int) -> bytes:
        """
        Kodiert Text für ein Feld mit fester Breite.
        Es bleibt mindestens ein Nullbyte übrig. Zeichen werden nicht zerschnitten.
        """
        return kuerze_text(text, laenge).encode("utf-8")

    def _bytes_to_text(self, raw: bytes) -> str:
        """Liest Text bis zum ersten Nullbyte."""
        return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")

    def _parse_rolle(self, raw: bytes) -> Rolle:
        """
        Parst das Rollen-Byte.
        Unbekannte Werte werden als Student gelesen.
        """
        s = raw.decode("ascii", errors="replace").strip().upper()
        for r in Rolle:
            if r.value == s:
                return r
        logger.warning("Unbekannte Rolle %r in Kontendatei, verwende Student.", raw)
        return Rolle.Student


class _BinaerRepository:
    """
    Gemeinsame Basis der Datei-Repositories.
    - FileStorage für Datei-Zugriff
    - BinaerSerializer für Mapping
    """

    def __init__(
        self,
        pfad: str,
        storage: Optional[FileStorage] = None,
        serializer: Optional[BinaerSerializer] = None
    ) -> None:
        """
        Erstellt das Repository.
        """
        self._pfad = pfad
        self._storage = storage or FileStorage()
        self._serializer = serializer or BinaerSerializer()

    @property
    def pfad(self) -> str:
        return self._pfad

    def _lade_bytes(self) -> bytes:
        """Liest die Datei. Fehlt sie, ist der Inhalt leer."""
        try:
            return self._storage.lese_bytes(self._pfad)
        except FileNotFoundError:
            logger.info("Datei %s nicht gefunden, starte mit leerem Bestand.", self._pfad)
            return b""


class BinaerKontenRepository(_BinaerRepository):
    """
    Repository für die Kontendatei.
    """

    def lade(self) -> List[Konto]:
        """
        Lädt die Datei und baut die Konten.
        """
        return self._serializer.konten_from_bytes(self._lade_bytes())

    def speichere(self, konten: Sequence[Konto]) -> None:
        """
        Serialisiert und schreibt in die Datei.
        """
        self._storage.schreibe_bytes(self._pfad, self._serializer.konten_to_bytes(konten))


class BinaerStudierendenRepository(_BinaerRepository):
    """
    Repository für die Studierendendatei.
    """

    def lade(self) -> List[Studierendendatensatz]:
        """
        Lädt die Datei und baut die Datensätze.
        """
        return self._serializer.studierende_from_bytes(self._lade_bytes())

    def speichere(self, datensaetze: Sequence[Studierendendatensatz]) -> None:
        """
        Serialisiert und schreibt in die Datei.
        """
        self._storage.schreibe_bytes(self._pfad, self._serializer.studierende_to_bytes(datensaetze))


class CsvExporter:
    """
    Exportiert Studierenden-Datensätze als CSV.
    - id und name in doppelten Anführungszeichen
    - Zahlen ohne Anführungszeichen
    - CGPA mit 2 Nachkommastellen
    """

    def __init__(self, storage: Optional[FileStorage] = None) -> None:
        self._storage = storage or FileStorage()

    def to_csv(self, datensaetze: Sequence[Studierendendatensatz]) -> str:
        """Baut den CSV-Text inklusive Kopfzeile."""
        zeilen = [CSV_KOPFZEILE]
        for s in datensaetze:
            noten = ",".join(str(n) for n in s.noten)
            zeilen.append(f"{self._quote(s.id)},{self._quote(s.name)},{noten},{s.summe},{s.cgpa:.2f}")
        return "\n".join(zeilen) + "\n"

    def exportiere(self, pfad: str, datensaetze: Sequence[Studierendendatensatz]) -> None:
        """
        Schreibt die CSV-Datei.
        Schreibfehler werden als SpeicherFehler weitergegeben.
        """
        try:
            self._storage.schreibe_text(pfad, self.to_csv(datensaetze))
        except OSError as e:
            raise SpeicherFehler(pfad, e) from e

    def _quote(self, text: str) -> str:
        """Setzt Text in Anführungszeichen. Innere Anführungszeichen werden verdoppelt."""
        return '"' + text.replace('"', '""') + '"'
