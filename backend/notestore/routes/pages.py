"""
NoteStore - Static Pages
==========================

What:  GET / (greeting) and GET /UploadForm.html (browser form for /write).
"""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse

router = APIRouter(tags=["Pages"])

UPLOAD_FORM_HTML = """<!DOCTYPE html>
<html>
<body>
  <h2>Upload Form</h2>

  <form method="post" action="/write" enctype="multipart/form-data">
    <label for="note_name">Note Name:</label><br>
    <input type="text" id="note_name" name="note_name"><br><br>
    <label for="note">Note:</label><br>
    <textarea id="note" name="note" rows="4" cols="50"></textarea><br><br>
    <input type="submit" value="Create Note">
  </form>

  <p>Click "Create Note" button to create a new note on the server.</p>

</body>
</html>"""


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def index() -> PlainTextResponse:
    return PlainTextResponse("Hello")


@router.get(
    "/UploadForm.html",
    response_class=HTMLResponse,
    summary="HTML form for creating a note",
)
async def upload_form() -> HTMLResponse:
    return HTMLResponse(UPLOAD_FORM_HTML)
