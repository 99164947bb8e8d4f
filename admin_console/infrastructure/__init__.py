"""Infrastructure Layer — database, key-value store, session lookup, and logging.

Invariants:
    - Infrastructure errors are mapped to core/errors.py types at this boundary
    - Process-wide clients are created and torn down by the FastAPI lifespan
"""
