"""Aggregator — fold installation records into per-name groups."""

from __future__ import annotations

from collections.abc import Iterable

from workspace_dedupe.engines.dedupe.models import DependencyGroup, InstalledDependency


def group_by_name(records: Iterable[InstalledDependency]) -> dict[str, DependencyGroup]:
    groups: dict[str, DependencyGroup] = {}
    for record in records:
        group = groups.get(record.name)
        if group is None:
            group = groups[record.name] = DependencyGroup(name=record.name)
        group.records.append(record)
    return groups
