"""
commute_planner.api

HTTP API package (FastAPI).

Responsibilities:
- Presentation boundary: roster upload, office moves, committed results.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers translate domain errors into HTTP statuses and never touch the engine directly.
