"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to ArticlePipeline; the pipeline instance is built once in the
      lifespan and reached through the get_pipeline dependency
"""
