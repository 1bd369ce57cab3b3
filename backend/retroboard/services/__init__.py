# Services package init
"""
RetroBoard Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services receive the AsyncSession of the caller's transaction, apply
       presence checks and persistence operations, and return response schemas.

Service Inventory:
    - UserService:  register / login
    - BoardService: list (with columns) / create / update / delete boards
    - NoteService:  create / update / delete notes, touching the parent board

Services never open or commit transactions themselves; route handlers wrap
each call in `Database.transaction()`.
"""
