"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ transcript logic (errors excepted)
    - All external calls wrapped with retry/timeout/error mapping
"""
