"""Infrastructure Layer — database sessions and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic beyond the error hierarchy
    - All store failures mapped to typed errors
"""
