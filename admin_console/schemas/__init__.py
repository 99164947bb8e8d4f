"""Pydantic Schemas — request/response contracts for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, cached payloads)
    - Domain types from core/ used for enum fields
"""
