# Services package init
"""
NoteStore - Services Layer
============================

Service Inventory:
    - NoteService: note CRUD over a flat directory of <name>.txt files

Services know nothing about HTTP. They raise NoteStoreError subclasses and
the application maps those to status codes.
"""
