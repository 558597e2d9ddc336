"""
Registration Lite - reservation and payment orchestration core.

Drives the ticket purchase flow of the registration widget:
- Catalog loading (ticket types and tax types, fetched concurrently)
- Reservation create/delete with status-code driven error classification
- Pluggable payment providers selected at reservation time
- Passwordless (one-time code) login
"""

__version__ = "1.0.0"
