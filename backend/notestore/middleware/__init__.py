# Middleware package init
"""
NoteStore - Middleware Package
================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: Generate correlation ID for logging and error handlers
    2. Logging: Log request details with the generated request ID

    Responses travel back through the chain in reverse, so the logging
    middleware sees the final status code and the request ID middleware
    adds the X-Request-ID header last.

    Unhandled exceptions become 500s in Starlette's ServerErrorMiddleware,
    outside this chain: they are logged with a traceback by the catch-all
    handler in main.py and get no access-log line.
"""
