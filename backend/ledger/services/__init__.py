"""Services Layer — orchestration of store IO around the pure core.

Invariants:
    - Services receive their collaborators through the constructor (no module singletons)
    - Business rules live in core/; services only sequence them

Design Decisions:
    - One service class per aggregate (ArticlePipeline) for locality
"""
