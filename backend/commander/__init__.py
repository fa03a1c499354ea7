"""Commander Application Package — CRUD API for shell command snippets.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
