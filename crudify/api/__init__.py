"""API Layer: route collections, the route registrar, and error handlers.

Invariants:
    - Routes carry no persistence logic (delegated to services/default_handlers.py)
"""
