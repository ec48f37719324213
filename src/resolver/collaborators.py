"""Collaborators the origin resolver consults for artifact identity.

``BuildModel`` maps an archive on disk back to the dependency that put it on
the classpath; ``PlatformResolver`` handles platform SDK archives. Default
implementations work from the unit's declared dependencies and from the
standard Maven and Gradle cache layouts.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Protocol

from constants import Constants
from .models import Origin, RawDependency, ResolvedTarget
from .special import normalize_path

logger = logging.getLogger(__name__)

_ANDROID_PLATFORM = re.compile(r"/platforms/android-([^/]+)/android\.jar$")


class BuildModel(Protocol):
    """Maps an artifact file to the dependency declaring it."""

    def dep_for_artifact(self, path: str) -> Optional[RawDependency]:
        ...


class PlatformResolver(Protocol):
    """Resolves a platform SDK archive origin."""

    def resolve(self, origin: Origin) -> Optional[ResolvedTarget]:
        ...


class ArtifactPathIndex:
    """Default build model.

    Tries, in order: the unit's declared dependencies matched by file name
    (``artifact-version[-classifier].jar``), a Maven local repository layout
    and a Gradle module cache layout.
    """

    def __init__(self, dependencies: Iterable[RawDependency] = ()):
        self._dependencies: List[RawDependency] = list(dependencies)

    def dep_for_artifact(self, path: str) -> Optional[RawDependency]:
        normalized = normalize_path(path)
        parts = [p for p in normalized.split("/") if p]
        if not parts:
            return None
        file_name = parts[-1]
        return (
            self._match_declared(file_name)
            or _from_maven_layout(parts)
            or _from_gradle_layout(parts)
        )

    def _match_declared(self, file_name: str) -> Optional[RawDependency]:
        stem = file_name.rsplit(".", 1)[0]
        best: Optional[RawDependency] = None
        for dep in self._dependencies:
            prefix = f"{dep.artifact_id}-{dep.version}"
            if stem == prefix or stem.startswith(prefix + "-"):
                # Prefer the declaration that accounts for the most of the name.
                if best is None or len(prefix) > len(f"{best.artifact_id}-{best.version}"):
                    best = dep
        return best


def _from_maven_layout(parts: List[str]) -> Optional[RawDependency]:
    """``.../repository/<group path>/<artifact>/<version>/<artifact>-<version>*.jar``."""
    if "repository" not in parts or len(parts) < 4:
        return None
    root = len(parts) - 1 - parts[::-1].index("repository")
    coords = parts[root + 1:]
    if len(coords) < 4:
        return None
    artifact, version, file_name = coords[-3], coords[-2], coords[-1]
    if not file_name.startswith(f"{artifact}-{version}"):
        return None
    group = ".".join(coords[:-3])
    return RawDependency(group, artifact, version, Constants.DEFAULT_SCOPE)


def _from_gradle_layout(parts: List[str]) -> Optional[RawDependency]:
    """``.../files-2.1/<group>/<artifact>/<version>/<hash>/<file>``."""
    if "files-2.1" not in parts:
        return None
    root = parts.index("files-2.1")
    coords = parts[root + 1:]
    if len(coords) != 5:
        return None
    group, artifact, version = coords[0], coords[1], coords[2]
    return RawDependency(group, artifact, version, Constants.DEFAULT_SCOPE)


class AndroidSdkResolver:
    """Maps ``.../platforms/android-<N>/android.jar`` to the Android framework."""

    def resolve(self, origin: Origin) -> Optional[ResolvedTarget]:
        path = origin.artifact_path
        if path is None:
            return None
        match = _ANDROID_PLATFORM.search(normalize_path(path))
        version = match.group(1) if match else ""
        if not match:
            logger.debug("Android archive outside an SDK platform directory: %s", path)
        return ResolvedTarget(
            to_unit=Constants.ANDROID_UNIT,
            to_version=version,
            to_repo_clone_url=Constants.ANDROID_CLONE_URL,
        )
