"""
commute_planner.engine

Commute analysis engine building blocks.

Responsibilities:
- Geocoding, route estimation, throttling, roster handling, aggregation, optimization.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Everything here is synchronous in-memory work except the service calls made by
# `geocoding` and `routing`; those are the only suspension points.
