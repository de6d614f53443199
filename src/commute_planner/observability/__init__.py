"""
commute_planner.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Engine modules log state-machine transitions through `get_logger`; nothing here
# depends on the engine.
