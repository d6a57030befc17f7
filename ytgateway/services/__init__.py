"""Service Layer — one orchestration method per gateway action.

Invariants:
    - Services receive validated schemas, never raw request bodies
    - Services raise GatewayError subclasses; HTTP mapping lives in api/
"""
