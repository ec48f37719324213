"""Override table mapping ``group/artifact`` patterns to clone URLs.

Patterns are tried in insertion order and the first one that matches wins.
Templates may reference capture groups as ``$0``-``$9`` or ``${name}``.
Every match of the winning pattern in the lookup string is replaced.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Tuple

import yaml

logger = logging.getLogger(__name__)

_GROUP_REF = re.compile(r"\$(\d|\{[A-Za-z_][A-Za-z0-9_]*\})")


class OverrideError(ValueError):
    """Raised when an override pattern does not compile."""


class OverrideTable:
    """Read-only, ordered regex to clone-URL-template table."""

    def __init__(self, entries: Iterable[Tuple[str, str]] = ()):
        compiled: List[Tuple[Pattern[str], str]] = []
        for pattern, template in entries:
            try:
                compiled.append((re.compile(pattern), template))
            except re.error as exc:
                raise OverrideError(f"invalid override pattern {pattern!r}: {exc}") from exc
        self._entries: Tuple[Tuple[Pattern[str], str], ...] = tuple(compiled)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "OverrideTable":
        return cls((str(k), str(v)) for k, v in mapping.items())

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> Tuple[Tuple[str, str], ...]:
        """Return ``(pattern, template)`` pairs in lookup order."""
        return tuple((pattern.pattern, template) for pattern, template in self._entries)

    def lookup(self, lookup: str) -> Optional[str]:
        """Return the overridden clone URL for ``group/artifact`` or None.

        Every match of the winning pattern is replaced by the expanded
        template; text outside the matches is kept.
        """
        for pattern, template in self._entries:
            if pattern.search(lookup):
                return pattern.sub(lambda m, t=template: _expand(m, t), lookup)
        return None


def _expand(match: "re.Match[str]", template: str) -> str:
    def ref(m: "re.Match[str]") -> str:
        token = m.group(1)
        group = token[1:-1] if token.startswith("{") else int(token)
        return match.group(group) or ""
    return _GROUP_REF.sub(ref, template)


def parse_properties(text: str) -> Dict[str, str]:
    """Parse Java ``.properties`` content into an ordered dict.

    Supports ``=``, ``:`` and whitespace separators, ``#``/``!`` comments,
    backslash line continuations and backslash escapes in keys.
    """
    result: Dict[str, str] = {}
    logical = ""
    for raw in text.splitlines():
        line = raw.lstrip()
        if not logical and (not line or line[0] in "#!"):
            continue
        if _continues(line):
            logical += line[:-1]
            continue
        logical += line
        key, value = _split_property(logical)
        result[key] = value
        logical = ""
    if logical:
        key, value = _split_property(logical)
        result[key] = value
    return result


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_property(line: str) -> Tuple[str, str]:
    key_chars: List[str] = []
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line):
            key_chars.append(_unescape(line[i + 1]))
            i += 2
            continue
        if ch in "=: \t":
            break
        key_chars.append(ch)
        i += 1
    rest = line[i:].lstrip(" \t")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t")
    return "".join(key_chars), _unescape_value(rest)


def _unescape(ch: str) -> str:
    return {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}.get(ch, ch)


def _unescape_value(value: str) -> str:
    out: List[str] = []
    i = 0
    while i < len(value):
        if value[i] == "\\" and i + 1 < len(value):
            out.append(_unescape(value[i + 1]))
            i += 2
        else:
            out.append(value[i])
            i += 1
    return "".join(out)


def load_overrides(path: Optional[str]) -> OverrideTable:
    """Load an override table from a ``.properties`` or YAML file.

    A missing path yields an empty table.
    """
    if not path or not os.path.isfile(path):
        if path:
            logger.debug("Override file not found: %s", path)
        return OverrideTable()
    with open(path, "r", encoding="utf-8") as fh:
        content = fh.read()
    if path.lower().endswith((".yml", ".yaml")):
        data = yaml.safe_load(content) or {}
        if not isinstance(data, dict):
            raise OverrideError(f"override file {path} must contain a mapping")
        table = OverrideTable.from_mapping(data)
    else:
        table = OverrideTable.from_mapping(parse_properties(content))
    logger.debug("Loaded %d override(s) from %s", len(table), path)
    return table
