# Middleware package init
"""
VRCX Companion API — Middleware Package
========================================

Middleware Chain (request direction):
    [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log and the error handlers can tag
    their lines with the same correlation ID.
"""
