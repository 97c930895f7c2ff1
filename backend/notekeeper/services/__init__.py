# Services package init
"""
NoteKeeper Backend - Services Layer
====================================

Service Inventory:
    - NoteService (note_service.py): note CRUD and tag orchestration over a
      NoteStore, translating absences into NotFoundError
    - tag_service.py: stateless tag add/remove/match/search functions
"""
