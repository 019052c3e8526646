"""Boundary layer: database, vector search, auth provider and object storage adapters."""
