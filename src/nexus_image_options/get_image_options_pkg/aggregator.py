"""Turns a list of Nexus search paths into an ordered list of image options."""

import functools
from typing import Iterable, Optional

from .structs import OptionValue
from ..utils.tag_parser import Tag
from ..utils.tag_ordering import compare_tags


_sort_key = functools.cmp_to_key(compare_tags)


def _keep_highest(bucket: dict[str, Tag], tag: Tag) -> None:
    seen = bucket.get(tag.version_or_branch)
    if seen is None or compare_tags(tag, seen) > 0:
        bucket[tag.version_or_branch] = tag


def aggregate(paths: Iterable[str]) -> list[Tag]:
    """Deduplicate and order the tags found in ``paths``.

    Only the highest build of each version or branch is kept. The result
    starts with the most recent release (if there is one), followed by all
    branches and then all releases, each in ascending order. The most recent
    release therefore appears twice.

    Args:
        paths: Search paths such as ``v2/my-service/manifests/1.2.3-4``

    Returns:
        The ordered tags
    """
    branches: dict[str, Tag] = {}
    releases: dict[str, Tag] = {}
    latest: Optional[Tag] = None

    for path in paths:
        tag = Tag(path)
        if tag.is_release:
            _keep_highest(releases, tag)
            if latest is None or compare_tags(tag, latest) > 0:
                latest = tag
        else:
            _keep_highest(branches, tag)

    ordered = [latest] if latest is not None else []
    ordered.extend(sorted(branches.values(), key=_sort_key))
    ordered.extend(sorted(releases.values(), key=_sort_key))
    return ordered


def to_option_value(tag: Tag) -> OptionValue:
    label = str(tag)
    return OptionValue(name=label, value=label)


def aggregate_option_values(paths: Iterable[str]) -> list[OptionValue]:
    """Like :func:`aggregate`, rendered as option values."""
    return [to_option_value(tag) for tag in aggregate(paths)]
