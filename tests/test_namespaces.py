from datetime import datetime, timedelta, timezone

import pytest

from kontour.namespaces import (
    LimitRange,
    NamespaceSummary,
    ResourceQuota,
    filter_by_status,
    filter_namespaces,
    format_age,
    format_metric,
    parse_resource_quantity,
    summarize_namespace,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _ns(name, labels=None, phase="Active", created=None):
    metadata = {"name": name}
    if labels is not None:
        metadata["labels"] = labels
    if created is not None:
        metadata["creationTimestamp"] = created
    return {"metadata": metadata, "status": {"phase": phase}}


@pytest.mark.parametrize("value", ["", "0", "abc", "12Qi", " 1"])
def test_parse_rejects_empty_zero_and_garbage(value):
    assert parse_resource_quantity(value) is None


def test_parse_unit_equivalences():
    assert parse_resource_quantity("1024Mi") == parse_resource_quantity("1Gi")
    assert parse_resource_quantity("1024Ki") == parse_resource_quantity("1Mi")
    assert parse_resource_quantity("1000m") == parse_resource_quantity("1")


def test_parse_plain_number():
    assert parse_resource_quantity("2.5") == pytest.approx(2.5)


def test_format_metric_unparseable_is_zero():
    assert format_metric("0") == "0"
    assert format_metric("bogus") == "0"


def test_format_metric_memory():
    assert format_metric("1Gi") == "1.0Gi"
    assert format_metric("512Mi") == "512Mi"


def test_format_metric_cpu():
    assert format_metric("250m") == "250m"
    assert format_metric("2") == "2.0"
    assert format_metric("0.5") == "500m"


def test_format_age_units():
    assert format_age(NOW - timedelta(days=3, hours=2), NOW) == "3d"
    assert format_age(NOW - timedelta(hours=5, minutes=1), NOW) == "5h"
    assert format_age(NOW - timedelta(minutes=10), NOW) == "10m"


def test_format_age_accepts_timestamp_string():
    created = (NOW - timedelta(days=2)).strftime("%Y-%m-%dT%H:%M:%SZ")
    assert format_age(created, NOW) == "2d"


def test_format_age_missing_timestamp():
    assert format_age(None, NOW) == ""


def test_filter_namespaces_by_name_and_label():
    items = [_ns("Payments"), _ns("web", {"team": "billing"}), _ns("other", {"x": "y"})]
    assert filter_namespaces(items, "pay") == [items[0]]
    assert filter_namespaces(items, "BILL") == [items[1]]
    assert filter_namespaces(items, "TEAM") == [items[1]]


def test_filter_namespaces_empty_query_keeps_all():
    items = [_ns("a"), _ns("b")]
    assert filter_namespaces(items, "") == items


def test_summarize_with_quota():
    quota = {
        "spec": {"hard": {"cpu": "2", "memory": "4Gi", "pods": "10"}},
        "status": {"used": {"cpu": "500m", "memory": "512Mi"}},
    }
    summary = summarize_namespace(
        _ns("dev", {"b": "2", "a": "1"}, created=NOW - timedelta(days=1)),
        [{}, {}],
        quota,
        None,
        NOW,
    )
    assert summary.name == "dev"
    assert summary.status == "Active"
    assert summary.phase == "Active"
    assert summary.pod_count == 2
    assert list(summary.labels) == ["a", "b"]
    assert summary.age == format_age(NOW - timedelta(days=1), NOW)
    assert summary.resource_quota == ResourceQuota(
        cpu_used=format_metric("500m"),
        cpu_limit=format_metric("2"),
        memory_used=format_metric("512Mi"),
        memory_limit=format_metric("4Gi"),
        pods_used=2,
        pods_limit=10,
    )
    assert summary.limit_range is None


def test_summarize_without_quota():
    summary = summarize_namespace(_ns("dev"), [{}], None, None, NOW)
    assert summary.resource_quota == ResourceQuota(pods_used=1, pods_limit=0)
    assert summary.age == ""


def test_summarize_bad_pod_limit_is_zero():
    quota = {"spec": {"hard": {"pods": "-3"}}}
    summary = summarize_namespace(_ns("dev"), [], quota, None, NOW)
    assert summary.resource_quota.pods_limit == 0
    assert summary.resource_quota.cpu_limit == "0"


def test_summarize_limit_range():
    limit_range = {
        "spec": {
            "limits": [
                {
                    "type": "Container",
                    "defaultRequest": {"cpu": "100m", "memory": "128Mi"},
                    "default": {"cpu": "1", "memory": "2Gi"},
                }
            ]
        }
    }
    summary = summarize_namespace(_ns("dev"), [], None, limit_range, NOW)
    assert summary.limit_range == LimitRange(
        default_request_cpu=format_metric("100m"),
        default_request_memory=format_metric("128Mi"),
        default_limit_cpu=format_metric("1"),
        default_limit_memory=format_metric("2Gi"),
    )


def test_summarize_empty_limit_range():
    summary = summarize_namespace(_ns("dev"), [], None, {"spec": {"limits": []}}, NOW)
    assert summary.limit_range == LimitRange()


def test_filter_by_status():
    active = NamespaceSummary(name="a", status="Active", age="")
    terminating = NamespaceSummary(name="b", status="Terminating", age="")
    summaries = [active, terminating]
    assert filter_by_status(summaries, "all") == summaries
    assert filter_by_status(summaries, "active") == [active]
    assert filter_by_status(summaries, "Active") == []