"""POM URL construction and SCM extraction."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Optional

from constants import Constants

_UTF8_BOM = b"\xef\xbb\xbf"


class PomParseError(ValueError):
    """Raised when POM content is not a well-formed project model."""


def pom_url(base_url: str, group: str, artifact: str, version: str) -> str:
    """Construct the POM URL for given Maven coordinates under a repository base.

    Args:
        base_url: Repository root, with or without a trailing slash
        group: Maven group ID
        artifact: Maven artifact ID
        version: Version string

    Returns:
        Full POM URL string
    """
    if not base_url.endswith("/"):
        base_url += "/"
    group_path = group.replace(".", "/")
    return f"{base_url}{group_path}/{artifact}/{version}/{artifact}-{version}{Constants.POM_SUFFIX}"


def strip_bom(content: bytes) -> bytes:
    if content.startswith(_UTF8_BOM):
        return content[len(_UTF8_BOM):]
    return content


def parse_scm_url(content: bytes) -> Optional[str]:
    """Return ``project/scm/url`` from POM bytes, or None when absent or blank.

    Namespaced (``http://maven.apache.org/POM/4.0.0``) and bare POMs are
    both accepted.

    Raises:
        PomParseError: If the content is not XML or its root is not ``project``.
    """
    try:
        root = ET.fromstring(strip_bom(content))
    except ET.ParseError as exc:
        raise PomParseError(f"malformed POM: {exc}") from exc

    ns = root.tag[:root.tag.index("}") + 1] if root.tag.startswith("{") else ""
    if root.tag[len(ns):] != "project":
        raise PomParseError(f"unexpected POM root element {root.tag!r}")

    # Direct children only: a <scm> under <parent> or <profiles> does not count.
    url_elem = root.find(f"{ns}scm/{ns}url")
    if url_elem is None or not isinstance(url_elem.text, str):
        return None
    url = url_elem.text.strip()
    return url or None
