"""
Database Models using SQLAlchemy.

These define the storage schema for graph nodes, edges, source documents and
their embeddings. They are NOT related to:
- API schemas (see app.schemas.api_schemas)
- Domain entities handed to the traversal and retrieval core (see app.domain.entities)
"""
from sqlalchemy import Column, ForeignKey, String, DateTime, Text, JSON, Enum
from sqlalchemy.orm import declarative_base, relationship
import datetime
import uuid

from app.domain.entities import NodeType, EdgeType

Base = declarative_base()

def generate_uuid():
    return str(uuid.uuid4())

def utcnow():
    return datetime.datetime.now(datetime.timezone.utc)

class Node(Base):
    __tablename__ = "nodes"

    id = Column(String, primary_key=True, default=generate_uuid)
    type = Column(Enum(NodeType), nullable=False)
    name = Column(String, nullable=False)
    properties = Column(JSON, default=dict)
    source_uri = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    embeddings = relationship("Embedding", back_populates="node")

class Edge(Base):
    __tablename__ = "edges"

    id = Column(String, primary_key=True, default=generate_uuid)
    source_id = Column(String, ForeignKey("nodes.id", ondelete="CASCADE"), nullable=False, index=True)
    target_id = Column(String, ForeignKey("nodes.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(EdgeType), nullable=False)
    properties = Column(JSON, default=dict)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

class Document(Base):
    __tablename__ = "documents"

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String, nullable=False)
    source_uri = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    embeddings = relationship("Embedding", back_populates="document")

class Embedding(Base):
    __tablename__ = "embeddings"

    id = Column(String, primary_key=True, default=generate_uuid)
    node_id = Column(String, ForeignKey("nodes.id", ondelete="CASCADE"), nullable=True, index=True)
    document_id = Column(String, ForeignKey("documents.id", ondelete="CASCADE"), nullable=True, index=True)
    vector = Column(JSON, nullable=False)  # list of floats, fixed length per model version
    model_version = Column(String, nullable=False)
    content = Column(Text)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    node = relationship("Node", back_populates="embeddings")
    document = relationship("Document", back_populates="embeddings")
