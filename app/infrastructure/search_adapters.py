"""Reference lexical (BM25) and vector (cosine) search adapters.

Both adapters return ranked ``SearchCandidate`` rows with raw scores; score
normalization and fusion happen in the domain layer.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from rank_bm25 import BM25Okapi

from app.db.repositories.embeddings import EmbeddingRepository
from app.db.repositories.nodes import NodeRepository
from app.domain.entities import NodeType, SearchCandidate
from app.domain.errors import NodeNotFoundError
from app.domain.ports import EmbeddingProviderPort
from app.infrastructure.embedding_provider import tokenize

logger = logging.getLogger(__name__)


def _ranked(candidates: List[SearchCandidate], limit: Optional[int]) -> List[SearchCandidate]:
    candidates.sort(key=lambda candidate: (-candidate.score, candidate.entity_id))
    return candidates[:limit] if limit is not None else candidates


def _node_text(name: str, properties: Dict[str, Any]) -> str:
    values = [str(value) for value in (properties or {}).values() if isinstance(value, (str, int, float))]
    return " ".join([name, *values])


class Bm25LexicalSearchAdapter:
    """Okapi BM25 over node names and scalar attribute values."""

    def __init__(self, repository: NodeRepository) -> None:
        self._repo = repository

    def search(self, query: str, limit: Optional[int] = None) -> List[SearchCandidate]:
        query_tokens = tokenize(query)
        if not query_tokens:
            return []

        nodes = self._repo.get_all_nodes()
        if not nodes:
            logger.debug("Lexical search over an empty graph")
            return []

        index = BM25Okapi([tokenize(_node_text(node.name, node.properties)) or [""] for node in nodes])
        scores = index.get_scores(query_tokens)

        candidates = [
            SearchCandidate(entity_id=node.id, score=float(score), entity_type=node.type, title=node.name)
            for node, score in zip(nodes, scores)
            if score > 0
        ]
        logger.debug(f"BM25 matched {len(candidates)} of {len(nodes)} nodes for '{query}'")
        return _ranked(candidates, limit)


class NumpyVectorSearchAdapter:
    """Cosine similarity between the query embedding and stored embeddings.

    Results are keyed by the embedding owner (node or document); an owner with
    several embeddings keeps its best score.
    """

    def __init__(
        self,
        repository: EmbeddingRepository,
        embedder: EmbeddingProviderPort,
        default_threshold: float = 0.7,
        model_version: Optional[str] = None,
    ) -> None:
        self._repo = repository
        self._embedder = embedder
        self._default_threshold = default_threshold
        self._model_version = model_version

    def search(
        self, query: str, threshold: Optional[float] = None, limit: int = 10
    ) -> List[SearchCandidate]:
        threshold = self._default_threshold if threshold is None else threshold
        query_vector = np.asarray(self._embedder.embed(query), dtype=np.float64)
        candidates = self._closest_owners(query_vector, threshold)
        logger.debug(f"Vector search kept {len(candidates)} owners above threshold {threshold}")
        return _ranked(candidates, limit)

    def similar_to_node(
        self, node_id: str, threshold: Optional[float] = None, limit: int = 10
    ) -> List[SearchCandidate]:
        """Rank owners by similarity to the node's first stored embedding."""
        if node_id not in self._repo.get_owner_nodes([node_id]):
            raise NodeNotFoundError(node_id)

        own = [
            row for row in self._repo.get_node_embeddings(node_id)
            if not self._model_version or row.model_version == self._model_version
        ]
        if not own:
            logger.warning(f"No embeddings found for node: {node_id}")
            return []

        threshold = self._default_threshold if threshold is None else threshold
        source_vector = np.asarray(own[0].vector, dtype=np.float64)
        candidates = [
            candidate for candidate in self._closest_owners(source_vector, threshold)
            if candidate.entity_id != node_id
        ]
        return _ranked(candidates, limit)

    def _closest_owners(self, query_vector: np.ndarray, threshold: float) -> List[SearchCandidate]:
        query_norm = np.linalg.norm(query_vector)
        if query_norm == 0:
            return []

        rows = [
            row for row in self._repo.get_embeddings(self._model_version)
            if (row.node_id or row.document_id) and len(row.vector) == len(query_vector)
        ]
        if not rows:
            return []

        matrix = np.asarray([row.vector for row in rows], dtype=np.float64)
        norms = np.linalg.norm(matrix, axis=1)
        norms[norms == 0] = np.inf
        similarities = matrix @ query_vector / (norms * query_norm)

        best: Dict[Tuple[str, bool], float] = {}
        for row, similarity in zip(rows, similarities):
            if similarity < threshold:
                continue
            owner = (row.node_id, True) if row.node_id else (row.document_id, False)
            if similarity > best.get(owner, -np.inf):
                best[owner] = float(similarity)

        return self._describe(best)

    def _describe(self, best: Dict[Tuple[str, bool], float]) -> List[SearchCandidate]:
        nodes = self._repo.get_owner_nodes([owner for owner, is_node in best if is_node])
        documents = self._repo.get_owner_documents([owner for owner, is_node in best if not is_node])

        candidates: List[SearchCandidate] = []
        for (owner, is_node), score in best.items():
            if is_node:
                node = nodes.get(owner)
                if node is None:
                    logger.warning(f"Skipping embedding owned by missing node {owner}")
                    continue
                candidates.append(SearchCandidate(owner, score, node.type, node.name))
            else:
                document = documents.get(owner)
                title = document.title if document else None
                candidates.append(SearchCandidate(owner, score, NodeType.DOCUMENT, title))
        return candidates
