"""
commute_planner.domain

Domain package.

Responsibilities:
- Immutable value types and the error taxonomy shared by engine, services and API.
"""

# Package marker.
