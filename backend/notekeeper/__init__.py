"""
NoteKeeper Backend - Application Package Initializer
=====================================================

What: In-memory note-keeping service with tag search.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (NoteService, tags)      │  ← Orchestration, tag matching
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Dataclasses + Pydantic
    ├─────────────────────────────────────┤
    │        NoteStore (in memory)        │  ← Owned by the app instance
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
