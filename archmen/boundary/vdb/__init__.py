"""
Vector search boundary layer.

Similarity search is delegated to the database; this package holds the
query/result schemas and the adapter that calls the SQL function.
"""

from archmen.boundary.vdb.similarity_search import SimilaritySearch
from archmen.boundary.vdb.vector_schemas import SimilarityMatch, SimilarityQuery

__all__ = ["SimilaritySearch", "SimilarityMatch", "SimilarityQuery"]
