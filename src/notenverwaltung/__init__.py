"""
notenverwaltung package

Dieses Paket implementiert eine Konsolen-Anwendung zur Verwaltung von
Studierenden-Datensätzen (Noten, Summe, CGPA) mit zwei Rollen: Administrator und Student.

Schichtenarchitektur:
- domain.py: Entitäten + Enums + Notenberechnung
- fehler.py: Fehlerklassen
- persistence.py: Binär-Persistierung + CSV-Export
- konten.py: Kontenspeicher
- studierende.py: Studierendenspeicher + Auswertungen
- service.py: Anwendungsfälle (Login, Registrierung, Verwaltung)
- view.py: Konsolen-Ausgabe
- controller.py: Menü-Orchestrierung
- main.py: Einstiegspunkt
"""
