"""Pydantic Schemas: derived model schemas and the pagination envelope.

Design Decisions:
    - Separate from db/: schemas are API contracts, mapped models are persistence
"""
