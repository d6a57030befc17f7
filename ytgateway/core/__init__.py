"""Core Layer — pure request/response logic, no IO, no async.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Argument building and output interpretation are deterministic
"""
