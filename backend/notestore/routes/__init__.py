# Routes package init
"""
NoteStore - API Routes Package
================================

Route Inventory:
    - notes.py:   GET    /notes              (list all notes)
                  GET    /notes/{note_name}  (read one note)
                  PUT    /notes/{note_name}  (replace a note's text)
                  DELETE /notes/{note_name}  (delete a note)
                  POST   /write              (create a note from a form)
    - pages.py:   GET    /                   (greeting)
                  GET    /UploadForm.html    (HTML form posting to /write)

Routes stay thin: pull data out of the request, call NoteService, return a
response. Errors are raised, never caught, and the handlers in main.py turn
them into status codes.
"""
