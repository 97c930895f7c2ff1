# Routes package init
"""
NoteKeeper Backend - API Routes Package
========================================

Route Inventory:
    - notes.py:   POST/GET        /notes
                  GET             /notes/search?q=
                  GET/POST/DELETE /notes/tags/{id}
                  GET/POST/DELETE /notes/{id}
    - health.py:  GET             /health

Routes stay thin: they read the request, call NoteService and shape the
response. Business rules live in notekeeper.services.
"""
