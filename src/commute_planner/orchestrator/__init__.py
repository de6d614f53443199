"""
commute_planner.orchestrator

Recompute orchestration package (LangGraph state machine).

Responsibilities:
- Typed state schema, nodes, routing, graph compilation and the generation-tracking
  orchestrator that drives them.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Call sites should use `RecomputeOrchestrator` (usually via the planner service), not the
# graph directly.
