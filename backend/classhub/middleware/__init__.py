# Middleware package init
"""
ClassHub Backend — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Rate Limit] → [Access Log] → [GZip] → [CORS] → Route

    Request ID runs first so that rate-limit rejections and access log lines
    already carry the correlation id.

Per-route steps (path id validation, identity, authorization) are not
middleware: they are FastAPI dependencies declared on each route, see
classhub.routes.dependencies.
"""
