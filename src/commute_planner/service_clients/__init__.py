"""
commute_planner.service_clients

Service client package.

Responsibilities:
- Provide client interfaces for the Geocoding Service and the Routing Services.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The engine depends on the protocols in `base` (not on HTTP) so tests can swap in fakes.
