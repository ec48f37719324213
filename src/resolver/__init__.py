"""Origin and dependency resolution for JVM build artifacts."""

from __future__ import annotations

from typing import Optional

from .collaborators import AndroidSdkResolver, ArtifactPathIndex, BuildModel, PlatformResolver
from .dependency import DependencyResolver
from .models import (
    ArtifactRepository,
    DepResolution,
    Origin,
    RawDependency,
    RepositoryAuth,
    ResolvedTarget,
    SourcePathEntry,
    SourceUnit,
)
from .origin import OriginResolver
from .overrides import OverrideTable


def create_resolver(
    unit: SourceUnit,
    config=None,
    build_model: Optional[BuildModel] = None,
    platform_resolver: Optional[PlatformResolver] = None,
) -> OriginResolver:
    """Wire an origin resolver and its dependency resolver for one unit.

    ``config`` is a ``config.ResolverConfig``; None means built-in defaults
    with no override table.
    """
    if config is None:
        dependency_resolver = DependencyResolver(unit)
    else:
        dependency_resolver = DependencyResolver(
            unit,
            repositories=config.repositories,
            overrides=config.overrides,
            central_url=config.central_url,
            timeout=config.request_timeout,
        )
    return OriginResolver(unit, dependency_resolver, build_model, platform_resolver)


__all__ = [
    "AndroidSdkResolver",
    "ArtifactPathIndex",
    "ArtifactRepository",
    "BuildModel",
    "DepResolution",
    "DependencyResolver",
    "Origin",
    "OriginResolver",
    "OverrideTable",
    "PlatformResolver",
    "RawDependency",
    "RepositoryAuth",
    "ResolvedTarget",
    "SourcePathEntry",
    "SourceUnit",
    "create_resolver",
]
