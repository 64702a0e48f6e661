"""
Include-pattern filtering.

Patterns have the form ``<typeGlob>.<nameGlob>`` and use the glob syntax of
Go's ``filepath.Match``: ``*``, ``?``, ``[abc]``, ``[a-z]``, negated classes
``[^a]`` and backslash escapes. ``!`` is an ordinary character, and ``-`` or
``]`` inside a class must be escaped. Filtering runs twice: once on resource
types before any lister is called, then on each ``<type>.<local_name>``
address once the identifiers are known.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from functools import lru_cache

from grafana_tfgen.catalog.models import ResourceCatalog
from grafana_tfgen.generate.errors import MalformedPatternError


@lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """Validate a glob and compile it to an anchored regular expression.

    ``*`` and ``?`` never match a ``/``.
    """
    translated: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "\\":
            if i + 1 >= n:
                raise MalformedPatternError(pattern, "trailing backslash")
            translated.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        if ch == "[":
            char_class, i = _translate_class(pattern, i + 1)
            translated.append(char_class)
            continue
        if ch == "*":
            translated.append("[^/]*")
        elif ch == "?":
            translated.append("[^/]")
        else:
            translated.append(re.escape(ch))
        i += 1
    return re.compile("".join(translated) + r"\Z", re.DOTALL)


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate the class starting after its ``[``; return it and the index past ``]``."""
    negate = i < len(pattern) and pattern[i] == "^"
    if negate:
        i += 1
    members: list[str] = []
    while True:
        if i < len(pattern) and pattern[i] == "]" and members:
            break
        low, i = _class_char(pattern, i)
        if i < len(pattern) and pattern[i] == "-":
            high, i = _class_char(pattern, i + 1)
            if low > high:
                raise MalformedPatternError(pattern, f"invalid range {low}-{high}")
            members.append(f"{re.escape(low)}-{re.escape(high)}")
        else:
            members.append(re.escape(low))
    return f"[{'^' if negate else ''}{''.join(members)}]", i + 1


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    if i >= len(pattern):
        raise MalformedPatternError(pattern, "unterminated character class")
    ch = pattern[i]
    # Unescaped '-' and ']' are only valid as range separator and terminator.
    if ch in "-]":
        raise MalformedPatternError(pattern, f"unexpected {ch!r} in character class")
    if ch == "\\":
        i += 1
        if i >= len(pattern):
            raise MalformedPatternError(pattern, "unterminated character class")
        ch = pattern[i]
    return ch, i + 1


def glob_match(pattern: str, value: str) -> bool:
    """Case-sensitive shell-style match; raises MalformedPatternError on bad syntax."""
    return _compile_glob(pattern).match(value) is not None


def _type_globs(patterns: Sequence[str]) -> list[str]:
    globs: list[str] = []
    for pattern in patterns:
        if "." not in pattern:
            raise MalformedPatternError(pattern)
        globs.append(pattern.split(".", 1)[0])
    return globs


def validate_patterns(patterns: Sequence[str]) -> None:
    """Fail fast on malformed include patterns."""
    for glob in _type_globs(patterns):
        _compile_glob(glob)
    for pattern in patterns:
        _compile_glob(pattern)


def filter_resources(catalog: ResourceCatalog, patterns: Sequence[str]) -> ResourceCatalog:
    """Narrow the catalog to the resource types matched by any include pattern."""
    if not patterns:
        return catalog

    validate_patterns(patterns)
    globs = _type_globs(patterns)
    return catalog.select(
        lambda descriptor: any(glob_match(glob, descriptor.name) for glob in globs)
    )


def matches_any_pattern(resource_type: str, local_name: str, patterns: Sequence[str]) -> bool:
    """Return whether ``<resource_type>.<local_name>`` matches an include pattern."""
    if not patterns:
        return True

    address = f"{resource_type}.{local_name}"
    return any(glob_match(pattern, address) for pattern in patterns)
