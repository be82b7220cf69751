"""Search filter for the ingress listing."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from kontour.listing import name_matches


def _host_matches(ingress: Mapping, query: str) -> bool:
    rules = (ingress.get("spec") or {}).get("rules") or []
    needle = query.lower()
    return any(
        rule.get("host") is not None and needle in rule["host"].lower() for rule in rules
    )


def filter_ingresses(items: Iterable[Mapping], query: str) -> list[Mapping]:
    """Keep ingresses whose name or any rule host contains the query, ignoring case."""
    items = list(items)
    if not query:
        return items
    return [i for i in items if name_matches(i, query) or _host_matches(i, query)]