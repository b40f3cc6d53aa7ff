"""Pattern replacement and wildcard matching on plain strings."""

from __future__ import annotations

from typing import Optional, Tuple


def replace_all(
    string: str, pattern: str, replacement: str, capacity: Optional[int] = None
) -> Tuple[str, bool]:
    """Replace every occurrence of ``pattern`` in ``string`` by ``replacement``.

    When ``capacity`` is given, the result never grows beyond that many
    characters. Whatever does not fit is cut off, and the returned flag is
    False. Without a capacity the replacement always fits.
    """
    if not pattern:
        raise ValueError("pattern must not be empty")
    if capacity is not None and len(string) > capacity:
        raise ValueError("string is longer than the capacity")

    if capacity is None or len(replacement) <= len(pattern):
        return string.replace(pattern, replacement), True

    growth = len(replacement) - len(pattern)
    overflow = False
    pos = string.find(pattern)
    while pos != -1:
        if growth > capacity - len(string):
            overflow = True
        string = (string[:pos] + replacement + string[pos + len(pattern):])[:capacity]
        pos = string.find(pattern, min(pos + len(replacement), len(string)))

    return string, not overflow


def find_first_not_escaped(string: str, char: str) -> int:
    """Index of the first ``char`` in ``string`` not preceded by a backslash, or -1."""
    if len(char) != 1:
        raise ValueError("expected a single character")
    chars = iter(enumerate(string))
    for index, current in chars:
        if current == "\\":
            # The next character is escaped and can never match.
            if next(chars, None) is None:
                break
            continue
        if current == char:
            return index
    return -1


def is_match(string: str, pattern: str) -> bool:
    """Match ``string`` against a pattern where ``*`` is a wildcard and ``\\`` escapes.

    An empty pattern matches everything; a pattern ending in a lone backslash
    is ill-formed and matches nothing.
    """
    if not pattern:
        return True

    size = len(string)
    pattern_size = len(pattern)
    js = 0
    jr = 0
    while jr < pattern_size:
        escaped = False
        if pattern[jr] == "\\":
            jr += 1
            if jr >= pattern_size:
                return False
            escaped = True

        if not escaped and pattern[jr] == "*":
            if jr == pattern_size - 1:
                return True
            rest = pattern[jr + 1:]
            remaining = max(size - js, 0)
            if remaining == 0:
                return rest.strip("*") == ""
            return any(is_match(string[js + offset:], rest) for offset in range(remaining))

        if js >= size or pattern[jr] != string[js]:
            return False

        jr += 1
        js += 1

    return js == size