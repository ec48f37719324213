"""Resolve origin references (archive entries and local files) to targets."""
from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, Optional, Union

from .cache import ResolutionCache
from .collaborators import AndroidSdkResolver, ArtifactPathIndex, BuildModel, PlatformResolver
from .dependency import DependencyResolver
from .models import Origin, RawDependency, ResolvedTarget, SourceUnit
from .special import FIXED_TARGETS, SpecialArtifact, classify_artifact

logger = logging.getLogger(__name__)

OriginRef = Union[Origin, str]


class OriginResolver:
    """Maps origins to resolved targets, one cached answer per archive or file.

    Packaged origins are normalized to their archive before the cache lookup,
    so every class inside one JAR shares a single resolution.
    """

    def __init__(
        self,
        unit: SourceUnit,
        dependency_resolver: DependencyResolver,
        build_model: Optional[BuildModel] = None,
        platform_resolver: Optional[PlatformResolver] = None,
    ):
        self.unit = unit
        self.dependency_resolver = dependency_resolver
        self.build_model = build_model if build_model is not None else ArtifactPathIndex(unit.dependencies)
        self.platform_resolver = platform_resolver if platform_resolver is not None else AndroidSdkResolver()
        self._cache: ResolutionCache[ResolvedTarget] = ResolutionCache()

    def resolve_origin(self, origin: Optional[OriginRef]) -> Optional[ResolvedTarget]:
        """Return the target an origin belongs to, or None when it cannot be resolved.

        Malformed or unsupported origins are logged and resolve to None.
        """
        if origin is None:
            return None
        if isinstance(origin, str):
            try:
                origin = Origin.parse(origin)
            except ValueError as exc:
                logger.warning("Malformed origin %r: %s", origin, exc)
                return None
        key = origin.normalized()
        return self._cache.get_or_compute(key, lambda: self._resolve(key))

    def resolve_origins(self, origins: Iterable[OriginRef]) -> Dict[str, Optional[ResolvedTarget]]:
        """Resolve several origins, keyed by their input text in input order."""
        return {str(origin): self.resolve_origin(origin) for origin in origins}

    def _resolve(self, origin: Origin) -> Optional[ResolvedTarget]:
        if not origin.is_packaged:
            return self._resolve_file(origin.location)

        try:
            jar_file = origin.artifact_path
        except ValueError as exc:
            logger.warning("Malformed origin %s: %s", origin, exc)
            return None
        if jar_file is None:
            logger.warning(
                "Unsupported origin %s: archive must be a jar:file: URI, not jar:%s",
                origin, origin.inner_scheme,
            )
            return None

        special = classify_artifact(jar_file)
        if special == SpecialArtifact.ANDROID:
            return self._resolve_platform(origin)
        if special is not None:
            return FIXED_TARGETS[special]

        dep = self._dep_for_artifact(jar_file)
        if dep is None:
            logger.debug("No dependency found for archive %s", jar_file)
            return None
        resolution = self.dependency_resolver.resolve_raw_dep(dep)
        return resolution.target

    def _dep_for_artifact(self, jar_file: str) -> Optional[RawDependency]:
        try:
            return self.build_model.dep_for_artifact(jar_file)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning("Error resolving JAR file path %s to dependency", jar_file, exc_info=True)
            return None

    def _resolve_platform(self, origin: Origin) -> Optional[ResolvedTarget]:
        try:
            return self.platform_resolver.resolve(origin)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.warning("Platform resolver failed for %s", origin, exc_info=True)
            return None

    def _resolve_file(self, path: str) -> Optional[ResolvedTarget]:
        """Match a local file against the unit's source roots; first containing root wins."""
        file_path = os.path.realpath(path)
        base = os.path.abspath(self.unit.directory)
        for entry in self.unit.source_path:
            root = os.path.realpath(os.path.join(base, entry.directory))
            if _contains(root, file_path):
                return ResolvedTarget(to_unit=entry.unit, to_version=entry.version)
        logger.debug("No source root of %s contains %s", self.unit.name, path)
        return None


def _contains(root: str, path: str) -> bool:
    if root == path:
        return False
    try:
        return os.path.commonpath([root, path]) == root
    except ValueError:
        # Different drives on Windows.
        return False
