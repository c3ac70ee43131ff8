"""
NoteStore - HTTP Note Service
===============================

What: A small HTTP service for CRUD over text notes, one <name>.txt file per
      note in a configured cache directory.

Architecture Note:

    ┌─────────────────────────────────────┐
    │   CLI (argparse) → Settings         │  ← configuration, read once
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      NoteService (filesystem)       │  ← existence checks, file I/O
    ├─────────────────────────────────────┤
    │     Cache directory (<name>.txt)    │  ← the only persistent state
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
