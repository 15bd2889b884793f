"""Ingestion layer.

This package turns raw hourly snapshot payloads (as fetched by the client or
any other collaborator) into validated, canonical point records.
"""

__all__: list[str] = []
