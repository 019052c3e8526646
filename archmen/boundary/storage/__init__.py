"""Object storage boundary: knowledge base source files in S3."""

from archmen.boundary.storage.s3_client import S3ContentClient

__all__ = ["S3ContentClient"]
