# Middleware package init
"""
PetSoft Backend — Middleware Package
======================================

Middleware Chain (order of execution):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate Limit rejects abusive clients before any other work
    2. Request ID assigns the correlation id every later log line carries
    3. Logging records method, path, status and duration on the way out
"""
