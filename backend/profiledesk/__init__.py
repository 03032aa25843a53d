"""
ProfileDesk Backend — Application Package Initializer
=====================================================

What: Marks the `profiledesk` directory as a Python package.
Who:  Imported by uvicorn (`profiledesk.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │   Routes + Auth Gate (API Layer)    │  ← HTTP concerns, envelopes
    ├─────────────────────────────────────┤
    │     Services (Business Logic)       │  ← validation, orchestration
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database / AppContext             │  ← engine, sessions, lifecycle
    └─────────────────────────────────────┘

    Three bounded contexts share the stack but not their tables:
    accounts (signup/login/me), profiles (image ingest/serve) and
    members (directory CRUD).
"""

__version__ = "1.0.0"
