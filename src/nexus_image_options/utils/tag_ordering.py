"""
Ordering of image tags by their comparison keys.

A comparison key such as ``3.1.2.3_4`` or ``ISSUE-234-one-issue-12`` is split
into items. Dots start a new *dotted* item, while the build separators
(``-``, ``_``, ``+``) and every switch between digits and non-digits start a
new *suffix* item. Items are then compared left to right:

- numbers compare by value, so ``4 < 14 < 111``
- qualifiers compare through ``_QUALIFIER_ORDER`` and fall back to their
  lower-cased text when they are not recognized
- a number outranks a qualifier at the same position
- a dotted item outranks a suffix item at the same position, so
  ``1.2.3.1-2`` sorts after ``1.2.3-5``
- a shorter key is padded with zero or empty items: a leftover number
  compares by value against 0 and a leftover qualifier compares against the
  final release, so ``1.2.3.0`` equals ``1.2.3`` and ``1.2.3.rc1`` sorts
  below it

>>> compare_keys("1.2.3-4", "1.2.3-14")
-1
>>> compare_keys("1.2.3", "1.2.3.1")
-1
>>> compare_keys("1.2.3-rc", "1.2.3")
-1
>>> compare_keys("1.2.3.0", "1.2.3")
0
"""

import typing
from typing import Optional, Sequence, Tuple, Union

if typing.TYPE_CHECKING:
    from .tag_parser import Tag


# Known qualifiers, lowest first. Anything else sorts after "sp".
_QUALIFIER_ORDER = {
    "alpha": 0,
    "a": 0,
    "beta": 1,
    "b": 1,
    "milestone": 2,
    "m": 2,
    "rc": 3,
    "cr": 3,
    "pre": 3,
    "preview": 3,
    "snapshot": 4,
    "": 5,
    "ga": 5,
    "final": 5,
    "release": 5,
    "sp": 6,
}

_RELEASE_RANK = _QUALIFIER_ORDER[""]
_UNKNOWN_RANK = max(_QUALIFIER_ORDER.values()) + 1

_DOT = "."
_SUFFIX_SEPARATORS = "-_+"

KeyItem = Tuple[bool, Union[int, str]]


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def _make_item(dotted: bool, text: str) -> KeyItem:
    if _is_digit(text[0]):
        return dotted, int(text)
    return dotted, text.lower()


def split_key(key: str) -> Tuple[KeyItem, ...]:
    """Split a comparison key into ``(dotted, value)`` items.

    >>> split_key("v1.2rc3")
    ((True, 'v'), (False, 1), (True, 2), (False, 'rc'), (False, 3))
    >>> split_key("sprint_11-4")
    ((True, 'sprint'), (False, 11), (False, 4))
    """
    items = []
    buffer = ""
    dotted = True

    for char in key:
        if char == _DOT or char in _SUFFIX_SEPARATORS:
            if buffer:
                items.append(_make_item(dotted, buffer))
                buffer = ""
            # With several delimiters in a row, the last one decides.
            dotted = char == _DOT
        elif buffer and _is_digit(buffer[-1]) != _is_digit(char):
            items.append(_make_item(dotted, buffer))
            buffer = char
            dotted = False
        else:
            buffer += char

    if buffer:
        items.append(_make_item(dotted, buffer))

    return tuple(items)


def _qualifier_rank(qualifier: str) -> int:
    return _QUALIFIER_ORDER.get(qualifier, _UNKNOWN_RANK)


def _compare_qualifiers(left: str, right: str) -> int:
    left_rank = _qualifier_rank(left)
    right_rank = _qualifier_rank(right)
    if left_rank != right_rank:
        return _sign(left_rank - right_rank)
    if left_rank != _UNKNOWN_RANK:
        # Aliases such as "a" and "alpha" are the same qualifier
        return 0
    return (left > right) - (left < right)


def _compare_items(left: KeyItem, right: KeyItem) -> int:
    left_dotted, left_value = left
    right_dotted, right_value = right

    if left_dotted != right_dotted:
        return 1 if left_dotted else -1

    left_is_number = isinstance(left_value, int)
    right_is_number = isinstance(right_value, int)
    if left_is_number and right_is_number:
        return _sign(left_value - right_value)
    if left_is_number:
        return 1
    if right_is_number:
        return -1
    return _compare_qualifiers(left_value, right_value)


def _compare_to_padding(item: KeyItem) -> int:
    _, value = item
    if isinstance(value, int):
        return _sign(value)
    return _sign(_qualifier_rank(value) - _RELEASE_RANK)


def compare_items(left: Sequence[KeyItem], right: Sequence[KeyItem]) -> int:
    """Compare two item sequences produced by :func:`split_key`."""
    for index in range(max(len(left), len(right))):
        if index >= len(left):
            result = -_compare_to_padding(right[index])
        elif index >= len(right):
            result = _compare_to_padding(left[index])
        else:
            result = _compare_items(left[index], right[index])
        if result:
            return result
    return 0


def compare_keys(left: str, right: str) -> int:
    """Compare two comparison keys, returning -1, 0 or 1."""
    return compare_items(split_key(left), split_key(right))


def compare_tags(left: "Tag", right: Optional["Tag"]) -> int:
    """Compare two tags, returning -1, 0 or 1.

    Anything is greater than a missing tag, so ``compare_tags(tag, None)``
    is always 1.
    """
    if right is None:
        return 1
    return compare_items(left.key_items, right.key_items)
