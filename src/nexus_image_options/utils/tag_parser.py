"""
Parsing of docker image paths returned by a Nexus search.

A path looks like ``v2/<artifact>/manifests/<tag>``. The tag is either a
version or a branch name, optionally followed by a build designator attached
with ``_``, ``+`` or ``-``:

- ``v3.1.2.3_4`` is release ``v3.1.2.3``, build ``4``
- ``ISSUE-1234-bug-description-7`` is branch ``ISSUE-1234-bug-description``,
  build ``7``
- ``sprint-11`` is branch ``sprint``, build ``11``

Parsing never fails: anything that does not look like a version ends up as a
branch.
"""

import string
from typing import Optional, Tuple

from .tag_ordering import KeyItem, compare_tags, split_key


BUILD_SEPARATORS = "_+-"

# Leading path segments longer than this are not stripped from the tag.
MAX_PREFIX_SEGMENT_LENGTH = 199

_ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)
_RELEASE_PREFIXES = ("", "v", "rc")
_RC_MARKER = "rc"
_DEFAULT_SEPARATOR = "-"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _skip_digits(text: str, start: int) -> int:
    index = start
    while index < len(text) and _is_digit(text[index]):
        index += 1
    return index


def _has_numeric_pair(text: str, start: int) -> bool:
    """Whether ``text[start:]`` begins with ``digits '.' digit``."""
    index = _skip_digits(text, start)
    if index == start or index + 1 >= len(text) or text[index] != ".":
        return False
    return _is_digit(text[index + 1])


def _release_prefix(label: str) -> Optional[str]:
    """Return the version marker in front of a release label.

    ``""`` for a bare version, ``"v"`` or ``"rc"`` for a prefixed one, and
    None when the label is not a release at all.
    """
    for prefix in _RELEASE_PREFIXES:
        if label.startswith(prefix) and _has_numeric_pair(label, len(prefix)):
            return prefix
    return None


def _is_rc_label(label: str) -> bool:
    if not label.startswith(_RC_MARKER):
        return False
    index = _skip_digits(label, len(_RC_MARKER))
    return index > len(_RC_MARKER) and index < len(label) and label[index] == "."


def artifact_id_of(path: str) -> str:
    """Return the second segment of a path.

    >>> artifact_id_of("v2/my-service/manifests/1.2.3-4")
    'my-service'
    """
    head, slash, rest = path.partition("/")
    if head and slash:
        path = rest
    return path.split("/", 1)[0]


def tag_of(path: str) -> str:
    """Return the last segment of a path.

    >>> tag_of("v2/my-service/manifests/1.2.3-4")
    '1.2.3-4'
    """
    segments = path.split("/")
    index = 0
    while index < len(segments) - 1 and len(segments[index]) <= MAX_PREFIX_SEGMENT_LENGTH:
        index += 1
    return "/".join(segments[index:])


def split_build(tag: str) -> Tuple[str, str, str]:
    """Split a tag into ``(version_or_branch, separator, build)``.

    Only the last separator counts, and only when it is followed by an
    alphanumeric run that reaches the end of the tag.

    >>> split_build("sprint-11_4")
    ('sprint-11', '_', '4')
    >>> split_build("1.2.3")
    ('1.2.3', '', '')
    """
    start = len(tag)
    while start > 0 and tag[start - 1] in _ALPHANUMERIC:
        start -= 1

    if start == len(tag) or start < 2 or tag[start - 1] not in BUILD_SEPARATORS:
        return tag, "", ""

    return tag[:start - 1], tag[start - 1], tag[start:]


def is_release(version_or_branch: str) -> bool:
    """Whether a label looks like a version rather than a branch.

    A release starts with two dot-separated numbers, optionally prefixed with
    ``v`` or ``rc``.

    >>> is_release("v2.0.1")
    True
    >>> is_release("sprint-11")
    False
    """
    return _release_prefix(version_or_branch) is not None


class Tag:
    """An image tag taken apart for sorting.

    Instances are comparable with ``<``, ``<=``, ``>`` and ``>=`` through
    :func:`~nexus_image_options.utils.tag_ordering.compare_tags`. Equality
    and hashing use the artifact and the published tag, so two different
    labels that happen to rank the same are still different tags.

    >>> tag = Tag("v2/my-service/manifests/v1.2.3_4")
    >>> tag.version_or_branch, tag.build, tag.comparison_key
    ('v1.2.3', '4', '1.2.3_4')
    >>> str(tag)
    'my-service:v1.2.3_4'
    """

    __slots__ = (
        "_artifact_id",
        "_raw_tag",
        "_version_or_branch",
        "_separator",
        "_build",
        "_comparison_key",
        "_key_items",
    )

    def __init__(self, path: str) -> None:
        raw_tag = tag_of(path)
        version_or_branch, separator, build = split_build(raw_tag)

        # rc-prefixed versions keep "rc" as a qualifier so they rank below
        # the matching final release.
        if _is_rc_label(version_or_branch):
            build += _RC_MARKER
            separator = separator or _DEFAULT_SEPARATOR

        prefix = _release_prefix(version_or_branch) or ""
        comparison_key = version_or_branch[len(prefix):] + separator + build

        set_field = super().__setattr__
        set_field("_artifact_id", artifact_id_of(path))
        set_field("_raw_tag", raw_tag)
        set_field("_version_or_branch", version_or_branch)
        set_field("_separator", separator)
        set_field("_build", build)
        set_field("_comparison_key", comparison_key)
        set_field("_key_items", split_key(comparison_key))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def artifact_id(self) -> str:
        return self._artifact_id

    @property
    def raw_tag(self) -> str:
        return self._raw_tag

    @property
    def version_or_branch(self) -> str:
        return self._version_or_branch

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def build(self) -> str:
        return self._build

    @property
    def comparison_key(self) -> str:
        return self._comparison_key

    @property
    def key_items(self) -> Tuple[KeyItem, ...]:
        return self._key_items

    @property
    def is_release(self) -> bool:
        return is_release(self._version_or_branch)

    def __str__(self) -> str:
        return f"{self._artifact_id}:{self._raw_tag}"

    def __repr__(self) -> str:
        return f"<Tag('{self}')>"

    def __hash__(self) -> int:
        return hash((self._artifact_id, self._raw_tag))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return (self._artifact_id, self._raw_tag) == (other._artifact_id, other._raw_tag)

    def __lt__(self, other: "Tag") -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return compare_tags(self, other) < 0

    def __le__(self, other: "Tag") -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return compare_tags(self, other) <= 0

    def __gt__(self, other: "Tag") -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return compare_tags(self, other) > 0

    def __ge__(self, other: "Tag") -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return compare_tags(self, other) >= 0


def parse_path(path: str) -> Tag:
    """Parse a Nexus search path into a :class:`Tag`.

    >>> parse_path("v2/COMP/manifests/sprint-11_4")
    <Tag('COMP:sprint-11_4')>
    """
    return Tag(path)
