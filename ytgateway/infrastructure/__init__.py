"""Infrastructure Layer — child process execution and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Subprocess failures are mapped to core/errors.py types before leaving this layer
"""
