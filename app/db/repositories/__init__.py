from app.db.repositories.nodes import NodeRepository
from app.db.repositories.embeddings import EmbeddingRepository

__all__ = ['NodeRepository', 'EmbeddingRepository']
