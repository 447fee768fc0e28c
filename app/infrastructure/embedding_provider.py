"""Deterministic feature-hashing embeddings for development and tests."""
from __future__ import annotations

import hashlib
import re
from typing import List

import numpy as np

from app.domain.errors import ValidationError

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)


def tokenize(text: str) -> List[str]:
    return _TOKEN_RE.findall(text.lower())


class HashingEmbeddingProvider:
    """Hashes each token into a signed bucket and L2-normalizes the result.

    The same text always yields the same vector, and texts that share tokens
    have positive cosine similarity. This is not a language model.
    """

    def __init__(self, dimension: int = 384, model_version: str = "hashing-v1") -> None:
        if dimension <= 0:
            raise ValueError("Embedding dimension must be positive")
        self.dimension = dimension
        self.model_version = model_version

    def embed(self, text: str) -> List[float]:
        if not text or not text.strip():
            raise ValidationError("Text cannot be empty")

        vector = np.zeros(self.dimension, dtype=np.float64)
        for token in tokenize(text):
            digest = hashlib.sha256(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:8], "big") % self.dimension
            sign = 1.0 if digest[8] & 1 else -1.0
            vector[bucket] += sign

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector /= norm
        return vector.tolist()
