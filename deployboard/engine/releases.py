"""Grouping of deploys per application and latest version marking."""

from functools import cmp_to_key
from itertools import zip_longest

from deployboard.models.deploy import DeployRecord


def compare_versions(left: str, right: str) -> int:
    """Compare two dotted version strings.

    Components are compared as integers when both parse as integers, and as
    strings otherwise, so ``2.0.1`` is newer than ``2.0.0-rc1``. A missing or
    empty component counts as ``0``, so ``1.0`` equals ``1.0.0``.

    Returns:
        Negative if left is older, zero if equal, positive if newer
    """
    for a, b in zip_longest(left.split("."), right.split("."), fillvalue="0"):
        a_num, b_num = _as_int(a), _as_int(b)
        if a_num is not None and b_num is not None:
            if a_num != b_num:
                return -1 if a_num < b_num else 1
        elif a != b:
            return -1 if a < b else 1
    return 0


version_key = cmp_to_key(compare_versions)


def group_per_app(records: list[DeployRecord]) -> dict[str, list[DeployRecord]]:
    """Group deploys by application name and mark the latest version(s).

    Applications keep the order they are first seen in, and records keep
    their relative order within an application. Every record whose version
    equals the newest version of its application is marked latest, so one
    version deployed to several environments is latest in all of them.
    Returned records are copies; the input is left untouched.
    """
    groups: dict[str, list[DeployRecord]] = {}
    for record in records:
        groups.setdefault(record.name, []).append(record)

    return {name: _mark_latest(group) for name, group in groups.items()}


def _mark_latest(group: list[DeployRecord]) -> list[DeployRecord]:
    newest = max((record.version for record in group), key=version_key)
    return [
        record.model_copy(update={"latest": compare_versions(record.version, newest) == 0})
        for record in group
    ]


def _as_int(component: str) -> int | None:
    if not component:
        return 0
    try:
        return int(component)
    except ValueError:
        return None
