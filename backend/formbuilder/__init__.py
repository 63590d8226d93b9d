"""
FormBuilder Backend - Application Package Initializer
======================================================

What: Backend for a form-builder product. Users register, build forms with
      arbitrary field definitions, share them for public submission and
      read the collected responses.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Auth gate  │  Services (Business)  │  ← credentials, ownership
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
