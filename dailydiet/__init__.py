"""
Daily Diet Backend — Application Package Initializer
======================================================

Architecture Note:

    ┌─────────────────────────────────────┐
    │    Routes + Request Gate (API)      │  ← HTTP, cookies, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← sessions, ownership, summary
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
