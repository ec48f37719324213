"""Resolve raw Maven dependencies to version-control targets.

Resolution is tiered and the first applicable tier wins:

1. a dependency whose group equals the current unit's name prefix is a
   sibling module of the same project (no clone URL);
2. the override table, or a clone URL already carried by the dependency;
3. the ``<scm><url>`` of the dependency's POM, tried across central and the
   configured repositories in order.

Every result, successful or not, is memoized under ``group:artifact:version:scope``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from constants import Constants
from common.http_client import FetchError, safe_get
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from .cache import ResolutionCache
from .models import ArtifactRepository, DepResolution, RawDependency, ResolvedTarget, SourceUnit
from .overrides import OverrideTable
from .pom import PomParseError, parse_scm_url, pom_url

logger = logging.getLogger(__name__)


class AttemptOutcome(Enum):
    """Result of probing one repository for a POM."""
    FOUND = "found"
    NO_SCM = "no_scm"
    FETCH_ERROR = "fetch_error"


@dataclass(frozen=True)
class PomAttempt:
    """One candidate repository attempt.

    Only ``FETCH_ERROR`` lets the search move on to the next repository; a POM
    that was fetched and parsed is authoritative whether or not it names an
    SCM URL.
    """
    repository: ArtifactRepository
    url: str
    outcome: AttemptOutcome
    clone_url: Optional[str] = None
    error: Optional[str] = None

    @property
    def terminal(self) -> bool:
        return self.outcome != AttemptOutcome.FETCH_ERROR


class DependencyResolver:
    """Cached, tiered resolver for one source unit."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        unit: SourceUnit,
        repositories: Sequence[ArtifactRepository] = (),
        overrides: Optional[OverrideTable] = None,
        central_url: Optional[str] = Constants.CENTRAL_REPO_URL,
        timeout: Optional[float] = None,
    ):
        self.unit = unit
        self.repositories = list(repositories)
        self.overrides = overrides if overrides is not None else OverrideTable()
        self.central_url = central_url
        self.timeout = timeout
        self._cache: ResolutionCache[DepResolution] = ResolutionCache()

    def candidate_repositories(self) -> List[ArtifactRepository]:
        """Central first, then configured repositories, without duplicate bases."""
        candidates: List[ArtifactRepository] = []
        if self.central_url:
            candidates.append(ArtifactRepository(Constants.CENTRAL_REPO_ID, self.central_url))
        seen = {c.base_url for c in candidates}
        for repo in self.repositories:
            if repo.base_url in seen:
                continue
            seen.add(repo.base_url)
            candidates.append(repo)
        return candidates

    def check_overrides(self, lookup: str) -> Optional[str]:
        """Return an override clone URL for ``group/artifact``, if any."""
        return self.overrides.lookup(lookup)

    def resolve_raw_dep(self, dep: RawDependency) -> DepResolution:
        """Resolve a dependency; failures are reported in ``DepResolution.error``."""
        return self._cache.get_or_compute(dep.key, lambda: self._resolve(dep))  # type: ignore[return-value]

    def resolve_deps(self, deps: Optional[Iterable[RawDependency]] = None) -> List[DepResolution]:
        """Resolve every dependency in order (the unit's declared list by default)."""
        if deps is None:
            deps = self.unit.dependencies
        return [self.resolve_raw_dep(dep) for dep in deps]

    def _resolve(self, dep: RawDependency) -> DepResolution:
        # Heuristic: a group equal to the unit's name prefix is assumed to be
        # a module of this project, even when an external group collides.
        if self.unit.group_prefix == dep.group_id:
            logger.debug("Dependency %s treated as same-project unit", dep)
            return DepResolution(dep, self._target(dep, None))

        clone_url = self.check_overrides(dep.lookup) or dep.repo_url
        if clone_url:
            logger.debug("Dependency %s resolved without lookup to %s", dep, clone_url)
            return DepResolution(dep, self._target(dep, clone_url))

        resolution = self._resolve_remote(dep)
        if resolution.error:
            logger.info("Unable to resolve dependency %s - %s", dep, resolution.error)
        return resolution

    def _resolve_remote(self, dep: RawDependency) -> DepResolution:
        error: Optional[str] = None
        for repo in self.candidate_repositories():
            attempt = self._try_repository(repo, dep)
            if attempt.outcome == AttemptOutcome.FOUND:
                return DepResolution(dep, self._target(dep, attempt.clone_url))
            error = attempt.error
            if attempt.terminal:
                break
            logger.debug("Unable to resolve dependency %s - %s, trying next server...", dep, error)
        if error is None:
            error = "no artifact repositories configured"
        return DepResolution(dep, error=error)

    def _try_repository(self, repo: ArtifactRepository, dep: RawDependency) -> PomAttempt:
        url = pom_url(repo.base_url, dep.group_id, dep.artifact_id, dep.version)
        if is_debug_enabled(logger):
            logger.debug(
                "Fetching POM file",
                extra=extra_context(
                    event="function_entry",
                    component="dependency_resolver",
                    action="fetch_pom",
                    target=safe_url(url),
                    repository=repo.id,
                )
            )
        auth = (repo.auth.username, repo.auth.password) if repo.auth else None
        try:
            response = safe_get(url, context=repo.id, auth=auth, timeout=self.timeout)
            clone_url = parse_scm_url(response.content)
        except (FetchError, PomParseError) as exc:
            return PomAttempt(repo, url, AttemptOutcome.FETCH_ERROR,
                              error=f"Could not download file {exc}")

        if clone_url:
            return PomAttempt(repo, url, AttemptOutcome.FOUND, clone_url=clone_url)
        error = f"{dep.artifact_id} does not have an associated SCM repository."
        logger.debug("Unable to find SCM repository %s - %s", dep, error)
        return PomAttempt(repo, url, AttemptOutcome.NO_SCM, error=error)

    @staticmethod
    def _target(dep: RawDependency, clone_url: Optional[str]) -> ResolvedTarget:
        return ResolvedTarget(
            to_unit=dep.lookup,
            to_version=dep.version,
            to_repo_clone_url=clone_url,
        )
