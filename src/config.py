"""Resolver configuration loading.

Configuration is read once (YAML, or JSON for ``.json`` paths) into a frozen
``ResolverConfig``. Missing files are not an error when no path was given
explicitly; an explicit path that cannot be read or parsed raises
``ConfigError`` so the CLI can report it.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

import yaml

from constants import Constants
from resolver.models import ArtifactRepository, RepositoryAuth, SourceUnit
from resolver.overrides import OverrideError, OverrideTable, load_overrides

logger = logging.getLogger(__name__)

BUNDLED_OVERRIDES = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "resolver", Constants.OVERRIDES_RESOURCE
)


class ConfigError(Exception):
    """Raised for unreadable or invalid configuration and unit documents."""


@dataclass(frozen=True)
class ResolverConfig:
    """Settings shared by every resolver built in one run."""
    repositories: Tuple[ArtifactRepository, ...] = ()
    overrides: OverrideTable = field(default_factory=OverrideTable)
    central_url: Optional[str] = Constants.CENTRAL_REPO_URL
    request_timeout: float = Constants.REQUEST_TIMEOUT


def _read_document(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            if path.lower().endswith(".json"):
                return json.load(fh)
            return yaml.safe_load(fh)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load {path}: {exc}") from exc


def _parse_repository(index: int, data: Any) -> ArtifactRepository:
    if isinstance(data, str):
        return ArtifactRepository(f"repo{index}", data)
    if not isinstance(data, Mapping) or not data.get("url"):
        raise ConfigError(f"repository #{index} needs a url")
    auth = None
    username = data.get("username")
    if username:
        password = data.get("password")
        password_env = data.get("password_env")
        if password is None and password_env:
            password = os.environ.get(str(password_env))
            if password is None:
                logger.warning(
                    "Environment variable %s for repository %s is not set",
                    password_env, data.get("id") or data["url"],
                )
        auth = RepositoryAuth(str(username), str(password or ""))
    return ArtifactRepository(str(data.get("id") or f"repo{index}"), str(data["url"]), auth)


def _build_overrides(data: Mapping[str, Any], base_dir: str) -> OverrideTable:
    entries: List[Tuple[str, str]] = []
    inline = data.get("overrides") or {}
    if not isinstance(inline, Mapping):
        raise ConfigError("overrides must be a mapping of pattern to clone URL")
    entries.extend((str(k), str(v)) for k, v in inline.items())

    overrides_file = data.get("overrides_file")
    if overrides_file:
        path = os.path.join(base_dir, str(overrides_file))
        if not os.path.isfile(path):
            raise ConfigError(f"overrides file not found: {path}")
        table_path = path
    else:
        table_path = BUNDLED_OVERRIDES
    try:
        # Inline entries come first so they win over file entries.
        file_table = load_overrides(table_path)
        return OverrideTable(entries + list(file_table.entries()))
    except OverrideError as exc:
        raise ConfigError(str(exc)) from exc


def config_from_dict(data: Optional[Mapping[str, Any]], base_dir: str = ".") -> ResolverConfig:
    """Build a ``ResolverConfig`` from an already-parsed mapping."""
    data = data or {}
    if not isinstance(data, Mapping):
        raise ConfigError("configuration must be a mapping")
    repositories = tuple(
        _parse_repository(i, repo) for i, repo in enumerate(data.get("repositories") or [])
    )
    central_url = data.get("central_url", Constants.CENTRAL_REPO_URL)
    try:
        timeout = float(data.get("request_timeout", Constants.REQUEST_TIMEOUT))
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"invalid request_timeout: {exc}") from exc
    return ResolverConfig(
        repositories=repositories,
        overrides=_build_overrides(data, base_dir),
        central_url=central_url or None,
        request_timeout=timeout,
    )


def load_config(path: Optional[str] = None) -> ResolverConfig:
    """Load configuration from ``path`` or ``$ORIGINMAP_CONFIG``.

    With neither set, defaults apply and the bundled override table is used.
    """
    path = path or os.environ.get(Constants.ENV_CONFIG)
    if not path:
        return config_from_dict({})
    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")
    data = _read_document(path)
    logger.debug("Loaded configuration from %s", path)
    return config_from_dict(data, os.path.dirname(os.path.abspath(path)))


def load_unit(path: str) -> SourceUnit:
    """Load a source unit document (YAML or JSON)."""
    data = _read_document(path)
    if not isinstance(data, Mapping):
        raise ConfigError(f"{path} must contain a mapping")
    try:
        unit = SourceUnit.from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid unit document {path}: {exc}") from exc
    # Relative unit directories are relative to the document itself.
    unit.directory = os.path.join(os.path.dirname(os.path.abspath(path)), unit.directory)
    return unit
