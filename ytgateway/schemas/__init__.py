"""Pydantic models for the gateway's request bodies and response payloads."""
