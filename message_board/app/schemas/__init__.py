"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the storage types so the JSON contract can
stay stable while the storage layout evolves.
"""
