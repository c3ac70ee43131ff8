"""
NoteStore - Pydantic Response Schemas
=======================================

What:  Models describing the JSON the API returns.
How:   FastAPI serializes route return values through these models and uses
       them to generate the OpenAPI document served at /docs.

Only the list endpoint returns JSON. Single notes, confirmations and errors
are plain text.
"""

from pydantic import BaseModel, Field


class NoteItem(BaseModel):
    """
    What:  One note as it appears in GET /notes.
    Who:   Built by NoteService.list_notes() for every <name>.txt file.

    Example:
        {"name": "groceries", "text": "milk, eggs"}
    """
    name: str = Field(description="Note name (file name without the .txt extension)")
    text: str = Field(description="Full note content")
