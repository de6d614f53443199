from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from langgraph.graph import END, StateGraph

from commute_planner.orchestrator.nodes import (
    RecomputeContext,
    commit_node,
    discard_node,
    estimate_node,
    route_after_estimate,
    snapshot_node,
)
from commute_planner.orchestrator.state import RecomputeState


def build_graph(*, ctx: RecomputeContext):
    """
    Returns a compiled LangGraph runnable for one recompute generation:

        snapshot → estimate → commit | discard → END
    """

    graph = StateGraph(RecomputeState)

    graph.add_node("snapshot", snapshot_node)
    graph.add_node("estimate", _bind_ctx(estimate_node, ctx))
    graph.add_node("commit", _bind_ctx(commit_node, ctx))
    graph.add_node("discard", discard_node)

    graph.set_entry_point("snapshot")

    graph.add_edge("snapshot", "estimate")
    graph.add_conditional_edges(
        "estimate",
        route_after_estimate,
        {"commit": "commit", "discard": "discard"},
    )
    graph.add_edge("commit", END)
    graph.add_edge("discard", END)

    return graph.compile()


def _bind_ctx(
    fn: Callable[..., Awaitable[dict[str, Any]]],
    ctx: RecomputeContext,
) -> Callable[[RecomputeState], Awaitable[dict[str, Any]]]:
    async def _wrapped(state: RecomputeState) -> dict[str, Any]:
        return await fn(state, ctx=ctx)

    return _wrapped
