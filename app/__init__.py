"""
Catalog API — Application Package
===================================

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← thin handlers returning envelopes
    ├─────────────────────────────────────┤
    │  Responses & Exception Classifier   │  ← uniform JSON envelope
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← queries, NotFound/DB errors
    ├─────────────────────────────────────┤
    │  Models, Schemas, Resources (Data)  │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
