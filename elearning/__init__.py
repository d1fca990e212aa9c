"""
Marketplace Package

Dieses Paket enthält den Kern des Kurs-Marktplatzes: Katalog, Warenkorb,
Bestellungen und Kurszugriff.

Struktur:
- users/: Profile und Rollen
- courses/: Kurskatalog und Kursinhalte
- cart/: Warenkorb pro Account mit Preis-Snapshots
- enrollments/: Kursbesitz (Entitlements) und Access Gate
- payments/: Bestell-Ledger
- management/: Django Management Commands

Checkout und Stripe-Webhook liegen in `core.stripe_integration`.

Author: Marketplace Development Team
Version: 1.0.0
"""
