"""Search and status filters for the daemon set listing."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from kontour.listing import name_matches

DAEMONSET_STATUSES = ("All", "Running", "Progressing", "Not Ready", "No Nodes")


def daemonset_matches_status(daemonset: Mapping, status: str) -> bool:
    """Whether a daemon set is in the given status; unknown statuses match nothing."""
    state = daemonset.get("status") or {}
    desired = state.get("desiredNumberScheduled") or 0
    ready = state.get("numberReady") or 0
    current = state.get("currentNumberScheduled") or 0
    updated = state.get("updatedNumberScheduled")
    if updated is None:
        updated = current

    if status == "Running":
        return ready == desired and current == desired and updated == desired
    if status == "Progressing":
        return 0 < ready < desired
    if status == "Not Ready":
        return ready == 0 and desired > 0
    if status == "No Nodes":
        return desired == 0
    return False


def filter_daemonsets(items: Iterable[Mapping], status: str, query: str) -> list[Mapping]:
    """Keep daemon sets whose name contains the query and that are in the status."""
    result = list(items)
    if query:
        result = [d for d in result if name_matches(d, query)]
    if status != "All":
        result = [d for d in result if daemonset_matches_status(d, status)]
    return result