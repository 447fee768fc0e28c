"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations


class DomainError(Exception):
    """Base for all domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class NodeNotFoundError(NotFoundError):
    """Queried graph node does not exist."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


class ValidationError(DomainError):
    """Invalid input or state."""


class AdapterError(DomainError):
    """A lexical or vector search adapter failed."""


class QueryTimeoutError(DomainError):
    """Traversal deadline expired between BFS levels."""
