"""
Laundry API Backend: Application Package Initializer
=====================================================

What: Marks the `laundryapi` directory as a Python package.
Who:  Imported by uvicorn (`laundryapi.main:app`), pytest, and the console script.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP layer)          │  ← status codes, envelopes
    ├─────────────────────────────────────┤
    │   Security (credentials, guards)    │  ← tokens, roles, policy table
    ├─────────────────────────────────────┤
    │      Services (business rules)      │  ← classification, projection
    ├─────────────────────────────────────┤
    │   Repositories (data access layer)  │  ← one parameterized statement each
    ├─────────────────────────────────────┤
    │    Database (async SQLAlchemy)      │  ← engine, sessions, bootstrap
    └─────────────────────────────────────┘

    Routes never talk to repositories directly, and repositories never
    decide what an error means. Services sit in between and translate.
"""

__version__ = "1.0.0"
