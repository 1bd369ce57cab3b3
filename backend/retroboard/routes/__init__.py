# Routes package init
"""
RetroBoard Backend — API Routes Package
=========================================

The route table. Each decorator maps (method, path pattern) to one handler;
path parameters are extracted by FastAPI and passed explicitly.

Route Inventory:
    - auth.py:    POST   /register
                  POST   /login
    - boards.py:  GET    /boards?userId=
                  POST   /boards
                  PUT    /boards/{board_id}
                  DELETE /boards/{board_id}
    - notes.py:   POST   /boards/{board_id}/notes
                  PUT    /boards/{board_id}/notes/{note_id}
                  DELETE /boards/{board_id}/notes/{note_id}
    - health.py:  GET    /health

Design Principle:
    Routes are THIN. They parse the body, open one transaction on the
    Database store, call a single service method inside it, and return the
    schema. Every success is 200; errors are raised and rendered by the
    global exception handlers.
"""
