from sqlalchemy.orm import Session
from app.db.models import Document, Embedding, Node
from typing import Dict, List, Optional, Sequence

class EmbeddingRepository:
    """Repository for documents and the embeddings attached to nodes or documents."""

    def __init__(self, db: Session):
        self.db = db

    def create_document(self, title: str, source_uri: str = None, document_id: str = None) -> Document:
        """
        Create a new source document.

        Args:
            title: Document title
            source_uri: Source locator (optional)
            document_id: Explicit identifier (optional, generated otherwise)

        Returns:
            Created document
        """
        document = Document(title=title, source_uri=source_uri)
        if document_id:
            document.id = document_id
        self.db.add(document)
        self.db.commit()
        self.db.refresh(document)
        return document

    def create_embedding(self, vector: Sequence[float], model_version: str, content: str = None,
                         node_id: str = None, document_id: str = None) -> Embedding:
        """
        Store an embedding owned by a node or a document.

        Args:
            vector: Embedding values
            model_version: Model/version tag of the producer
            content: Content excerpt the vector was computed from (optional)
            node_id: Owning node ID (optional)
            document_id: Owning document ID (optional)

        Returns:
            Created embedding
        """
        embedding = Embedding(
            node_id=node_id,
            document_id=document_id,
            vector=[float(value) for value in vector],
            model_version=model_version,
            content=content,
        )
        self.db.add(embedding)
        self.db.commit()
        self.db.refresh(embedding)
        return embedding

    def get_embeddings(self, model_version: Optional[str] = None) -> List[Embedding]:
        """
        Get all embeddings, optionally restricted to one model version.
        """
        query = self.db.query(Embedding)
        if model_version:
            query = query.filter(Embedding.model_version == model_version)
        return query.order_by(Embedding.id).all()

    def get_node_embeddings(self, node_id: str) -> List[Embedding]:
        return self.db.query(Embedding).filter(Embedding.node_id == node_id).order_by(Embedding.id).all()

    def get_owner_nodes(self, node_ids: Sequence[str]) -> Dict[str, Node]:
        if not node_ids:
            return {}
        return {node.id: node for node in self.db.query(Node).filter(Node.id.in_(list(node_ids))).all()}

    def get_owner_documents(self, document_ids: Sequence[str]) -> Dict[str, Document]:
        if not document_ids:
            return {}
        documents = self.db.query(Document).filter(Document.id.in_(list(document_ids))).all()
        return {document.id: document for document in documents}
