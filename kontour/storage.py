"""Volume mounts and volume claim templates for the stateful set form."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

ACCESS_MODE = "ReadWriteOnce"


@dataclass
class VolumeMount:
    """One editable row of the volume mounts table."""

    name: str = ""
    mount_path: str = ""


@dataclass
class VolumeClaimTemplate:
    """One editable row of the volume claim templates table."""

    name: str = ""
    storage_size: str = ""
    storage_class: str = ""


def default_volume_claims() -> list[VolumeClaimTemplate]:
    """The claim templates the stateful set form opens with."""
    return [VolumeClaimTemplate(name="data", storage_size="1Gi", storage_class="standard")]


def default_volume_mounts() -> list[VolumeMount]:
    """The volume mounts the stateful set form opens with."""
    return [VolumeMount(name="data", mount_path="/data")]


def volume_mounts(mounts: Iterable[VolumeMount]) -> list[dict]:
    """Convert mount rows, skipping those without a name or a path."""
    return [
        {"name": mount.name, "mountPath": mount.mount_path}
        for mount in mounts
        if mount.name and mount.mount_path
    ]


def volume_claim_templates(claims: Iterable[VolumeClaimTemplate]) -> list[dict]:
    """Convert claim rows into persistent volume claims.

    Rows without a name or a storage size are skipped; an empty storage
    class leaves the class unset.
    """
    templates = []
    for claim in claims:
        if not claim.name or not claim.storage_size:
            continue
        spec: dict = {
            "accessModes": [ACCESS_MODE],
            "resources": {"requests": {"storage": claim.storage_size}},
        }
        if claim.storage_class:
            spec["storageClassName"] = claim.storage_class
        templates.append({"metadata": {"name": claim.name}, "spec": spec})
    return templates