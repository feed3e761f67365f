"""Pydantic request/response schemas: the JSON contract with the mobile client."""
