# kontour

This package is the logic behind a Kubernetes dashboard, with no GUI attached. It works on plain
dictionaries shaped like Kubernetes API objects. These can come from any client library, or from
JSON decoded from `kubectl get -o json`. The package has no dependencies outside the standard
library.

## Installation

```
pip install .
```

## Filtering listings

Search queries are matched case-insensitively as substrings. An empty query keeps every item.

- `kontour.listing`
  - `name_matches(obj, query)` tests an object's name against the query.
  - `filter_cronjobs(items, query)` matches a cron job on its name or its schedule.
  - `filter_jobs(items, query)` matches a job on its name or its namespace.
  - `job_key(job)` returns `"<namespace>-<name>"`.
- `kontour.network.filter_ingresses(items, query)` matches an ingress on its name or on the
  host of any of its rules.
- `kontour.deployments.filter_deployments(items, status, query)` filters by name and by status.
  - `deployment_matches_status(deployment, status)` classifies a single deployment.
  - The statuses are listed in `DEPLOYMENT_STATUSES`: "Available", "Progressing", "Degraded"
    and "Scaled Down".
- `kontour.daemonsets.filter_daemonsets(items, status, query)` filters by name and by status.
  - `daemonset_matches_status(daemonset, status)` classifies a single daemon set.
  - The statuses are listed in `DAEMONSET_STATUSES`: "Running", "Progressing", "Not Ready" and
    "No Nodes".

A status of "All" turns off status filtering. An unknown status matches nothing.

```python
from kontour.deployments import filter_deployments

ready = filter_deployments(items, "Available", "web")
```

## Namespaces

`kontour.namespaces` provides the following.

- `parse_resource_quantity(value)` converts a quantity string.
  - Memory values ending in `Gi`, `Mi` or `Ki` become GiB.
  - CPU values ending in `m` become cores.
  - Empty, zero or unparseable values give `None`.
- `format_metric(value)` renders a quantity for display, for example `"1.5Gi"`, `"512Mi"`,
  `"250m"` or `"2.0"`. It returns `"0"` for anything it cannot parse.
- `format_age(created, now=None)` gives an age as `"3d"`, `"5h"` or `"12m"`. It returns an
  empty string when there is no timestamp.
- `filter_namespaces(items, query)` matches on the name or on any label key or value.
- `summarize_namespace(namespace, pods, resource_quota=None, limit_range=None, now=None)` builds
  a `NamespaceSummary`. The summary holds a `ResourceQuota` and, when a limit range is given, a
  `LimitRange`.
- `filter_by_status(summaries, status)` keeps summaries whose lower-cased status equals
  `status`. The value `"all"` keeps every summary.

## Nodes

`kontour.nodes` provides the following.

- `parse_quantity(value)` parses a quantity into base units: cores or bytes. It accepts binary
  suffixes (`Ki` to `Ei`) and decimal suffixes (`n` to `E`).
- `node_type(node)` returns `"master"` or `"worker"`, based on the control-plane label.
- `node_status(node)` returns the status of the node's Ready condition.
- `usage_percent(used, total)` is capped at 100 and rounded to two decimals.
- `pods_on_node(pods, node_name)` keeps the pods scheduled on the node.
- `summarize_node(node, pods, metrics=None)` builds a `NodeSummary`.
  - The summary has CPU, memory and storage percentages, the pod count against capacity, the
    internal IP and the node's conditions.
  - When the metrics carry no storage usage, used storage is taken as capacity minus
    allocatable.
- `filter_nodes(summaries, node_type, query)` filters by type, where `"all"` means any type. It
  matches the query against the name, IP, OS, status, version and architecture.
- `count_by_type(summaries, node_type)` counts the nodes of one type.

## Storage fragments

`kontour.storage` converts `VolumeMount` and `VolumeClaimTemplate` rows into manifest
fragments.

- `volume_mounts(mounts)` and `volume_claim_templates(claims)` skip incomplete rows.
- Claim templates request `ReadWriteOnce` access.
- `default_volume_mounts()` and `default_volume_claims()` give the starting rows: a `data`
  volume of `1Gi` on class `standard`, mounted at `/data`.

## What this package does not do

- It does not connect to a cluster. Fetching objects is left to the caller.
- It has no user interface and no command-line entry point.
- It does not build complete pod or stateful set manifests. Only the storage fragments above
  are provided.

## Running the tests

```
pip install .[test]
pytest
```