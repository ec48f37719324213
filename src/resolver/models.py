"""Data models shared by the origin and dependency resolvers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import unquote, urlsplit

from constants import Constants, OriginKind


@dataclass(frozen=True)
class Origin:
    """Opaque reference to a code location.

    A packaged origin points inside an archive
    (``jar:file:/a/b.jar!/x/Y.class``); ``location`` keeps everything between
    the ``jar:`` prefix and the last ``!`` and ``inner_path`` the rest. A local
    origin is a plain filesystem path.
    """
    kind: OriginKind
    location: str
    inner_path: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "Origin":
        """Build an origin from a ``jar:``/``file:`` URI or a bare absolute path.

        Raises:
            ValueError: If the text is empty, uses an unknown scheme or names a
                ``file`` archive without a path.
        """
        if not isinstance(text, str) or not text.strip():
            raise ValueError("empty origin")
        text = text.strip()
        if text.startswith("jar:"):
            body = text[len("jar:"):]
            if not body:
                raise ValueError(f"jar origin without location: {text}")
            pos = body.rfind("!")
            if pos == -1:
                origin = cls(OriginKind.PACKAGED, body)
            else:
                origin = cls(OriginKind.PACKAGED, body[:pos], body[pos + 1:] or None)
            if origin.inner_scheme == "file":
                # jar:file:!/x and jar:file://host!/x name no archive
                _file_uri_path(origin.location.split("!", 1)[0])
            return origin
        if text.startswith("file:"):
            return cls(OriginKind.LOCAL, _file_uri_path(text))
        if text.startswith("/"):
            return cls(OriginKind.LOCAL, text)
        raise ValueError(f"unsupported origin: {text}")

    @property
    def is_packaged(self) -> bool:
        return self.kind == OriginKind.PACKAGED

    @property
    def inner_scheme(self) -> Optional[str]:
        """Scheme of a packaged origin's location (``file`` for local archives)."""
        if not self.is_packaged:
            return None
        scheme = urlsplit(self.location).scheme
        return scheme.lower() or None

    @property
    def artifact_path(self) -> Optional[str]:
        """Filesystem path of the outermost archive, or of the local file."""
        if not self.is_packaged:
            return self.location
        if self.inner_scheme != "file":
            return None
        # Nested archives keep their own "!" separators in the location.
        return _file_uri_path(self.location.split("!", 1)[0])

    def normalized(self) -> "Origin":
        """Return this origin without its inner path.

        Two references into the same archive share one normalized origin.
        """
        if self.is_packaged and self.inner_path is not None:
            return replace(self, inner_path=None)
        return self

    def uri(self) -> str:
        if self.is_packaged:
            suffix = f"!{self.inner_path}" if self.inner_path is not None else ""
            return f"jar:{self.location}{suffix}"
        return f"file:{self.location}"

    def __str__(self) -> str:
        return self.uri()


def _file_uri_path(uri: str) -> str:
    parts = urlsplit(uri)
    if parts.scheme != "file":
        raise ValueError(f"not a file URI: {uri}")
    path = unquote(parts.path)
    if not path:
        raise ValueError(f"file URI without path: {uri}")
    return path


@dataclass(frozen=True)
class RawDependency:
    """A declared dependency as produced by the build model."""
    group_id: str
    artifact_id: str
    version: str
    scope: str = Constants.DEFAULT_SCOPE
    repo_url: Optional[str] = None

    @property
    def key(self) -> str:
        """Cache key: ``group:artifact:version:scope``."""
        return f"{self.group_id}:{self.artifact_id}:{self.version}:{self.scope}"

    @property
    def lookup(self) -> str:
        """Override-table lookup string: ``group/artifact``."""
        return f"{self.group_id}/{self.artifact_id}"

    @classmethod
    def from_coordinate(cls, coordinate: str) -> "RawDependency":
        """Parse ``group:artifact:version[:scope]``.

        Raises:
            ValueError: If fewer than three parts are present.
        """
        parts = [p.strip() for p in coordinate.strip().split(":")]
        if len(parts) < 3 or len(parts) > 4 or not all(parts):
            raise ValueError(f"expected group:artifact:version[:scope], got {coordinate!r}")
        scope = parts[3] if len(parts) == 4 else Constants.DEFAULT_SCOPE
        return cls(parts[0], parts[1], parts[2], scope)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawDependency":
        return cls(
            group_id=str(data["groupId"]),
            artifact_id=str(data["artifactId"]),
            version=str(data.get("version") or ""),
            scope=str(data.get("scope") or Constants.DEFAULT_SCOPE),
            repo_url=data.get("repoURI") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "groupId": self.group_id,
            "artifactId": self.artifact_id,
            "version": self.version,
            "scope": self.scope,
            "repoURI": self.repo_url,
        }

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class ResolvedTarget:
    """Outcome of a resolution.

    A target without a clone URL is a sibling unit of the same project.
    """
    to_unit: str
    to_version: str
    to_repo_clone_url: Optional[str] = None
    to_unit_type: str = Constants.DEFAULT_UNIT_TYPE

    @property
    def is_external(self) -> bool:
        return bool(self.to_repo_clone_url)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ToRepoCloneURL": self.to_repo_clone_url or "",
            "ToUnit": self.to_unit,
            "ToUnitType": self.to_unit_type,
            "ToVersionString": self.to_version,
        }


@dataclass(frozen=True)
class DepResolution:
    """Pairs a raw dependency with exactly one of a target or an error."""
    raw: RawDependency
    target: Optional[ResolvedTarget] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.target is not None and self.error:
            raise ValueError("DepResolution cannot carry both a target and an error")

    @property
    def ok(self) -> bool:
        return self.target is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Raw": self.raw.to_dict(),
            "Target": self.target.to_dict() if self.target else None,
            "Error": self.error or "",
        }


@dataclass(frozen=True)
class SourcePathEntry:
    """Source root belonging to a unit of the current project."""
    unit: str
    version: str
    directory: str

    @classmethod
    def from_value(cls, value: Any) -> "SourcePathEntry":
        if isinstance(value, Mapping):
            return cls(str(value["unit"]), str(value.get("version") or ""), str(value["dir"]))
        unit, version, directory = value
        return cls(str(unit), str(version or ""), str(directory))


@dataclass
class SourceUnit:
    """Already-resolved source unit consumed by the resolvers."""
    name: str
    version: str = ""
    directory: str = "."
    dependencies: List[RawDependency] = field(default_factory=list)
    source_path: List[SourcePathEntry] = field(default_factory=list)
    unit_type: str = Constants.DEFAULT_UNIT_TYPE

    @property
    def group_prefix(self) -> str:
        """Part of the unit name before the first ``/``."""
        return self.name.split("/", 1)[0]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SourceUnit":
        """Build a unit from the JSON/YAML unit document."""
        if not data.get("Name"):
            raise ValueError("unit document has no Name")
        return cls(
            name=str(data["Name"]),
            version=str(data.get("Version") or ""),
            directory=str(data.get("Dir") or "."),
            dependencies=[RawDependency.from_dict(d) for d in data.get("Dependencies") or []],
            source_path=[SourcePathEntry.from_value(v) for v in data.get("SourcePath") or []],
            unit_type=str(data.get("Type") or Constants.DEFAULT_UNIT_TYPE),
        )


@dataclass(frozen=True)
class RepositoryAuth:
    username: str
    password: str


@dataclass(frozen=True)
class ArtifactRepository:
    """A configured Maven-layout artifact repository."""
    id: str
    url: str
    auth: Optional[RepositoryAuth] = None

    @property
    def base_url(self) -> str:
        return self.url if self.url.endswith("/") else self.url + "/"
