"""Search and status filters for the deployment listing."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from kontour.listing import name_matches

DEPLOYMENT_STATUSES = ("All", "Available", "Progressing", "Degraded", "Scaled Down")


def deployment_matches_status(deployment: Mapping, status: str) -> bool:
    """Whether a deployment is in the given status; unknown statuses match nothing."""
    spec = deployment.get("spec") or {}
    state = deployment.get("status") or {}
    desired = spec.get("replicas") or 0
    updated = state.get("updatedReplicas") or 0
    available = state.get("availableReplicas") or 0
    conditions = state.get("conditions") or []

    def has(kind: str) -> bool:
        return any(c.get("type") == kind and c.get("status") == "True" for c in conditions)

    is_progressing = has("Progressing")
    is_available = has("Available")
    has_replica_failure = any(
        c.get("type") == "Progressing" and c.get("reason") == "ReplicaFailure"
        for c in conditions
    )

    if status == "Available":
        return is_available and is_progressing and updated == desired and available == desired
    if status == "Progressing":
        return is_progressing and (not is_available or updated != desired)
    if status == "Degraded":
        return has_replica_failure or (not is_progressing and not is_available)
    if status == "Scaled Down":
        return desired == 0
    return False


def filter_deployments(items: Iterable[Mapping], status: str, query: str) -> list[Mapping]:
    """Keep deployments whose name contains the query and that are in the status."""
    result = list(items)
    if query:
        result = [d for d in result if name_matches(d, query)]
    if status != "All":
        result = [d for d in result if deployment_matches_status(d, status)]
    return result