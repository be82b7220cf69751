"""Search filters for the job and cron job listings."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def _lower_contains(text: str | None, query: str) -> bool:
    return text is not None and query.lower() in text.lower()


def name_matches(obj: Mapping, query: str) -> bool:
    """Whether the object's name contains the query, ignoring case."""
    return _lower_contains((obj.get("metadata") or {}).get("name"), query)


def filter_cronjobs(items: Iterable[Mapping], query: str) -> list[Mapping]:
    """Keep cron jobs whose name or schedule contains the query."""
    items = list(items)
    if not query:
        return items
    return [
        cronjob
        for cronjob in items
        if name_matches(cronjob, query)
        or _lower_contains((cronjob.get("spec") or {}).get("schedule"), query)
    ]


def filter_jobs(items: Iterable[Mapping], query: str) -> list[Mapping]:
    """Keep jobs whose name or namespace contains the query."""
    items = list(items)
    if not query:
        return items
    return [
        job
        for job in items
        if name_matches(job, query)
        or _lower_contains((job.get("metadata") or {}).get("namespace"), query)
    ]


def job_key(job: Mapping) -> str:
    """A key unique per job: namespace and name joined by a dash."""
    metadata = job.get("metadata") or {}
    return f"{metadata.get('namespace') or ''}-{metadata.get('name') or ''}"