"""
knowledge-graph-api Application Package

Directory Structure:
├── routers/           # FastAPI route handlers (graph, search, health)
├── schemas/           # Pydantic models for API responses
│   └── api_schemas.py # HTTP response structures
├── application/       # Use-case services (traversal, hybrid search, validation)
├── domain/            # Entities, ports, errors and the pure algorithms
├── infrastructure/    # Graph accessor, BM25/vector adapters, embeddings
├── services/cache/    # TTL + LRU result cache
├── db/                # SQLAlchemy models, session and repositories
└── config.py          # Application configuration

The traversal and fusion algorithms in app.domain know nothing about storage;
they read the graph through GraphAccessorPort and candidates through the
search ports, so the SQL-backed adapters can be swapped without touching them.
"""
