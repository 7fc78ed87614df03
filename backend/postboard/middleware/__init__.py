# Middleware package init
"""
Postboard Backend — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so every later log line can carry it
    2. Logging records status and duration on the way back out

Authentication is NOT middleware: it is the `require_user` dependency,
attached only to the routes that mutate data.
"""
