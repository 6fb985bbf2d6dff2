"""Services Layer — entity stores and the shared request pipeline.

Invariants:
    - One store per entity, each over the request's AsyncSession
    - Every handler runs through request_pipeline.run_operation

Design Decisions:
    - Stores satisfy the Protocols in core/repository_protocols.py
"""
