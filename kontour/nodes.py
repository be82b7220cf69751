"""Node listing: resource quantities, usage percentages and filters."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from kontour.namespaces import _parse_uint32

CONTROL_PLANE_LABEL = "node-role.kubernetes.io/control-plane"

_NUMBER = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")
_BINARY_SUFFIXES = {
    "Ki": 2.0**10,
    "Mi": 2.0**20,
    "Gi": 2.0**30,
    "Ti": 2.0**40,
    "Pi": 2.0**50,
    "Ei": 2.0**60,
}
_DECIMAL_SUFFIXES = {
    "n": 1e-9,
    "u": 1e-6,
    "m": 1e-3,
    "k": 1e3,
    "M": 1e6,
    "G": 1e9,
    "T": 1e12,
    "P": 1e15,
    "E": 1e18,
}


@dataclass
class NodeSummary:
    """What the node listing shows for one node."""

    name: str
    node_type: str
    status: str
    kubernetes_version: str = ""
    os: str = ""
    architecture: str = ""
    ip: str = ""
    pods: tuple[int, int] = (0, 0)
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    storage_usage: float = 0.0
    conditions: list[tuple[str, str]] = field(default_factory=list)


def _number(text: str) -> float | None:
    return float(text) if _NUMBER.fullmatch(text) else None


def parse_quantity(value: object) -> float:
    """Parse a quantity into base units (cores or bytes); unparseable values give 0.0."""
    text = str(value).strip()
    for suffix, factor in _BINARY_SUFFIXES.items():
        if text.endswith(suffix):
            number = _number(text[: -len(suffix)])
            return 0.0 if number is None else number * factor
    if text and text[-1] in _DECIMAL_SUFFIXES:
        number = _number(text[:-1])
        return 0.0 if number is None else number * _DECIMAL_SUFFIXES[text[-1]]
    number = _number(text)
    return 0.0 if number is None else number


def node_type(node: Mapping) -> str:
    """"master" for control-plane nodes, "worker" otherwise."""
    labels = (node.get("metadata") or {}).get("labels") or {}
    return "master" if labels.get(CONTROL_PLANE_LABEL) is not None else "worker"


def node_status(node: Mapping) -> str:
    """The status of the node's Ready condition, or "Unknown"."""
    conditions = (node.get("status") or {}).get("conditions") or []
    ready = next((c for c in conditions if c.get("type") == "Ready"), None)
    return "Unknown" if ready is None else ready.get("status", "")


def _round_half_away(number: float) -> float:
    return math.copysign(math.floor(abs(number) + 0.5), number)


def usage_percent(used: float, total: float) -> float:
    """Percentage of total in use, capped at 100 and rounded to two decimals."""
    if total <= 0.0:
        return 0.0
    percent = min(used / total * 100.0, 100.0)
    return _round_half_away(percent * 100.0) / 100.0


def pods_on_node(pods: Iterable[Mapping], node_name: str) -> list[Mapping]:
    """Keep the pods scheduled on the named node."""
    return [
        pod for pod in pods if (pod.get("spec") or {}).get("nodeName") == node_name
    ]


def _quantity(quantities: Mapping, key: str) -> float:
    raw = quantities.get(key)
    return parse_quantity(raw if raw is not None else "0")


def summarize_node(
    node: Mapping, pods: Sequence[Mapping], metrics: Mapping | None = None
) -> NodeSummary:
    """Build the display summary of a node.

    ``pods`` are the pods running on the node; ``metrics`` is the node's
    usage mapping from the metrics API, if any.
    """
    metadata = node.get("metadata") or {}
    state = node.get("status") or {}
    info = state.get("nodeInfo")
    addresses = state.get("addresses") or []
    allocatable = state.get("allocatable") or {}
    capacity = state.get("capacity") or {}
    usage = metrics or {}

    internal = next((a for a in addresses if a.get("type") == "InternalIP"), None)
    max_pods_raw = capacity.get("pods")
    max_pods = _parse_uint32(str(max_pods_raw)) if max_pods_raw is not None else 0

    storage_total = _quantity(capacity, "ephemeral-storage")
    if usage.get("ephemeral-storage") is not None:
        storage_used = parse_quantity(usage["ephemeral-storage"])
    else:
        storage_used = storage_total - _quantity(allocatable, "ephemeral-storage")

    return NodeSummary(
        name=metadata.get("name") or "",
        node_type=node_type(node),
        status=node_status(node),
        kubernetes_version=info.get("kubeletVersion", "") if info else "",
        os=f"{info.get('osImage', '')} {info.get('kernelVersion', '')}" if info else "",
        architecture=info.get("architecture", "") if info else "",
        ip=internal.get("address", "") if internal else "",
        pods=(len(pods), max_pods),
        cpu_usage=usage_percent(_quantity(usage, "cpu"), _quantity(capacity, "cpu")),
        memory_usage=usage_percent(
            _quantity(usage, "memory"), _quantity(capacity, "memory")
        ),
        storage_usage=usage_percent(storage_used, storage_total),
        conditions=[
            (c.get("type", ""), c.get("status", ""))
            for c in state.get("conditions") or []
        ],
    )


def filter_nodes(
    summaries: Iterable[NodeSummary], node_type: str, query: str
) -> list[NodeSummary]:
    """Keep nodes of the selected type ("all" for any) matching the query."""
    needle = query.lower()

    def matches(node: NodeSummary) -> bool:
        if node_type != "all" and node.node_type != node_type:
            return False
        if not needle:
            return True
        fields = (
            node.name,
            node.ip,
            node.os,
            node.status,
            node.kubernetes_version,
            node.architecture,
        )
        return any(needle in text.lower() for text in fields)

    return [node for node in summaries if matches(node)]


def count_by_type(summaries: Iterable[NodeSummary], node_type: str) -> int:
    """How many nodes are of the given type."""
    return sum(1 for node in summaries if node.node_type == node_type)