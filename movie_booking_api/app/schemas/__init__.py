"""
Pydantic schema definitions for API payloads.

Request and response bodies use camelCase keys on the wire while the
Python attributes stay snake_case; ``common.APIModel`` carries the alias
configuration shared by every schema.
"""
