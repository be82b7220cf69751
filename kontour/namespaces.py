"""Namespace listing: quantity formatting, quotas, limit ranges and filters."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_UNSIGNED = re.compile(r"\+?[0-9]+")
_UINT32_MAX = 2**32 - 1


@dataclass
class ResourceQuota:
    """Formatted usage and limits of a namespace's resource quota."""

    cpu_used: str = "0"
    cpu_limit: str = "0"
    memory_used: str = "0"
    memory_limit: str = "0"
    pods_used: int = 0
    pods_limit: int = 0


@dataclass
class LimitRange:
    """Formatted container defaults of a namespace's limit range."""

    default_request_cpu: str = "0"
    default_request_memory: str = "0"
    default_limit_cpu: str = "0"
    default_limit_memory: str = "0"


@dataclass
class NamespaceSummary:
    """What the namespace listing shows for one namespace."""

    name: str
    status: str
    age: str
    labels: dict[str, str] = field(default_factory=dict)
    pod_count: int = 0
    phase: str = ""
    resource_quota: ResourceQuota = field(default_factory=ResourceQuota)
    limit_range: LimitRange | None = None


def _parse_float(text: str) -> float | None:
    if not _FLOAT.fullmatch(text):
        return None
    return float(text)


def _trim_end(text: str, suffix: str) -> str:
    while suffix and text.endswith(suffix):
        text = text[: -len(suffix)]
    return text


def parse_resource_quantity(value: str) -> float | None:
    """Parse a quantity into GiB for memory or cores for CPU.

    Returns None for empty, zero or unparseable values.
    """
    if not value or value == "0":
        return None
    if value.endswith("Gi"):
        return _parse_float(_trim_end(value, "Gi"))
    if value.endswith("Mi"):
        number = _parse_float(_trim_end(value, "Mi"))
        return None if number is None else number / 1024.0
    if value.endswith("Ki"):
        number = _parse_float(_trim_end(value, "Ki"))
        return None if number is None else number / (1024.0 * 1024.0)
    if value.endswith("m"):
        number = _parse_float(_trim_end(value, "m"))
        return None if number is None else number / 1000.0
    return _parse_float(value)


def format_metric(value: str) -> str:
    """Render a quantity for display; anything unparseable shows as "0"."""
    number = parse_resource_quantity(value)
    if number is None:
        return "0"
    if value.endswith(("Gi", "Mi", "Ki")):
        if number >= 1.0:
            return f"{number:.1f}Gi"
        return f"{number * 1024.0:.0f}Mi"
    if value.endswith("m") or number < 1.0:
        return f"{number * 1000.0:.0f}m"
    return f"{number:.1f}"


def _to_datetime(value: datetime | str) -> datetime:
    if isinstance(value, str):
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_age(created: datetime | str | None, now: datetime | None = None) -> str:
    """Age as whole days, else hours, else minutes; empty without a timestamp."""
    if created is None:
        return ""
    current = _to_datetime(now) if now is not None else datetime.now(timezone.utc)
    seconds = (current - _to_datetime(created)).total_seconds()
    days = math.trunc(seconds / 86400)
    if days > 0:
        return f"{days}d"
    hours = math.trunc(seconds / 3600)
    if hours > 0:
        return f"{hours}h"
    return f"{math.trunc(seconds / 60)}m"


def filter_namespaces(items: Iterable[Mapping], query: str) -> list[Mapping]:
    """Keep namespaces whose name, or any label key or value, contains the query."""
    items = list(items)
    if not query:
        return items
    needle = query.lower()

    def matches(namespace: Mapping) -> bool:
        metadata = namespace.get("metadata") or {}
        name = metadata.get("name")
        if name is not None and needle in name.lower():
            return True
        labels = metadata.get("labels") or {}
        return any(needle in k.lower() or needle in v.lower() for k, v in labels.items())

    return [namespace for namespace in items if matches(namespace)]


def _format_quantity(quantities: Mapping | None, key: str) -> str:
    raw = (quantities or {}).get(key)
    return format_metric(str(raw) if raw is not None else "0")


def _parse_uint32(text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        return 0
    number = int(text)
    return number if number <= _UINT32_MAX else 0


def _quota_summary(quota: Mapping | None, pod_count: int) -> ResourceQuota:
    if quota is None:
        return ResourceQuota(pods_used=pod_count)
    hard = (quota.get("spec") or {}).get("hard")
    used = (quota.get("status") or {}).get("used")
    pods = (hard or {}).get("pods")
    return ResourceQuota(
        cpu_used=_format_quantity(used, "cpu"),
        cpu_limit=_format_quantity(hard, "cpu"),
        memory_used=_format_quantity(used, "memory"),
        memory_limit=_format_quantity(hard, "memory"),
        pods_used=pod_count,
        pods_limit=_parse_uint32(str(pods)) if pods is not None else 0,
    )


def _limit_range_summary(limit_range: Mapping | None) -> LimitRange | None:
    if limit_range is None:
        return None
    limits = (limit_range.get("spec") or {}).get("limits") or []
    first = limits[0] if limits else {}
    requests = first.get("defaultRequest")
    defaults = first.get("default")
    return LimitRange(
        default_request_cpu=_format_quantity(requests, "cpu"),
        default_request_memory=_format_quantity(requests, "memory"),
        default_limit_cpu=_format_quantity(defaults, "cpu"),
        default_limit_memory=_format_quantity(defaults, "memory"),
    )


def summarize_namespace(
    namespace: Mapping,
    pods: Sequence[Mapping],
    resource_quota: Mapping | None = None,
    limit_range: Mapping | None = None,
    now: datetime | None = None,
) -> NamespaceSummary:
    """Build the display summary of a namespace from its objects."""
    metadata = namespace.get("metadata") or {}
    status = (namespace.get("status") or {}).get("phase") or ""
    pod_count = len(pods)
    return NamespaceSummary(
        name=metadata.get("name") or "",
        status=status,
        age=format_age(metadata.get("creationTimestamp"), now),
        labels=dict(sorted((metadata.get("labels") or {}).items())),
        pod_count=pod_count,
        phase=status,
        resource_quota=_quota_summary(resource_quota, pod_count),
        limit_range=_limit_range_summary(limit_range),
    )


def filter_by_status(
    summaries: Iterable[NamespaceSummary], status: str
) -> list[NamespaceSummary]:
    """Keep summaries whose lower-cased status equals the selection, or all for "all"."""
    return [s for s in summaries if status == "all" or s.status.lower() == status]