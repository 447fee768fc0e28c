from pydantic_settings import BaseSettings
from pathlib import Path

# Get the repository root directory (parent of app directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""

    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True

    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database settings
    DATABASE_URL: str = f"sqlite:///{REPO_ROOT / 'storage' / 'knowledge_graph.db'}"

    # Hybrid search
    HYBRID_FTS_WEIGHT: float = 0.5
    HYBRID_VECTOR_WEIGHT: float = 0.5
    CANDIDATE_POOL_SIZE: int = 200  # candidates fetched from each adapter before fusing

    # Vector search
    VECTOR_SIMILARITY_THRESHOLD: float = 0.7
    VECTOR_DEFAULT_LIMIT: int = 10
    EMBEDDING_DIMENSION: int = 384
    EMBEDDING_MODEL_VERSION: str = "hashing-v1"

    # Adaptive weighting
    ADAPTIVE_STRONG_RATIO: float = 0.5
    ADAPTIVE_MARGIN: float = 0.15
    ADAPTIVE_SHIFTED_WEIGHT: float = 0.7

    # Result cache
    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: int = 300
    CACHE_MAX_SIZE: int = 1000

    # Bounds enforced at the API boundary
    NEIGHBORHOOD_MAX_HOPS: int = 3
    PATH_DEFAULT_MAX_HOPS: int = 5
    PATH_MAX_HOPS_LIMIT: int = 10
    SUBGRAPH_MAX_NODES: int = 100
    CENTRALITY_MAX_NODES: int = 1000
    MAX_PAGE_SIZE: int = 100
    TRAVERSAL_TIMEOUT_SECONDS: float = 10.0

    class Config:
        env_file = ".env"

settings = Settings()
