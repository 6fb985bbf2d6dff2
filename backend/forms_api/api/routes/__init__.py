"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes never contain persistence logic (delegate to services/ stores
      through services/request_pipeline.py)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
