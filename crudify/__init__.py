"""Crudify: generic CRUD route binding for FastAPI over async SQLAlchemy.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, e.g.
      `from crudify.api.route_collection import CrudResource`
"""
