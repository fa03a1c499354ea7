"""Services Layer — repository implementation, mapping, and patch application.

Invariants:
    - Services own all IO against the store; routes only orchestrate
"""
