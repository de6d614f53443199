"""
commute_planner.services

Service-layer package.

Responsibilities:
- Own the roster and office location on behalf of the presentation layer.
- Compose geocoding, orchestration and aggregation into caller-facing operations.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services should be pure Python and easily testable with fake service clients.
