"""Well-known platform archives that never go through dependency resolution."""

from __future__ import annotations

import os
from enum import Enum
from typing import Optional

from constants import Constants
from .models import ResolvedTarget


class SpecialArtifact(Enum):
    """Platform archives recognised by path or file name."""
    JDK = "jdk"
    LANGTOOLS = "langtools"
    NASHORN = "nashorn"
    ANDROID = "android"


JDK_TARGET = ResolvedTarget(
    to_unit=Constants.JDK_UNIT,
    to_version="",
    to_repo_clone_url=Constants.JDK_CLONE_URL,
)

LANGTOOLS_TARGET = ResolvedTarget(
    to_unit=Constants.LANGTOOLS_UNIT,
    to_version="",
    to_repo_clone_url=Constants.LANGTOOLS_CLONE_URL,
)

NASHORN_TARGET = ResolvedTarget(
    to_unit=Constants.NASHORN_UNIT,
    to_version="",
    to_repo_clone_url=Constants.NASHORN_CLONE_URL,
)

FIXED_TARGETS = {
    SpecialArtifact.JDK: JDK_TARGET,
    SpecialArtifact.LANGTOOLS: LANGTOOLS_TARGET,
    SpecialArtifact.NASHORN: NASHORN_TARGET,
}


def normalize_path(path: str) -> str:
    """Use forward slashes regardless of the host separator."""
    return path.replace(os.sep, "/").replace("\\", "/")


def classify_artifact(path: str) -> Optional[SpecialArtifact]:
    """Return the special artifact kind for an archive path, first match wins."""
    normalized = normalize_path(path)
    if any(marker in normalized for marker in Constants.JRE_LIB_MARKERS):
        return SpecialArtifact.JDK
    name = normalized.rsplit("/", 1)[-1]
    if name == Constants.TOOLS_JAR:
        return SpecialArtifact.LANGTOOLS
    if name == Constants.NASHORN_JAR:
        return SpecialArtifact.NASHORN
    if name == Constants.ANDROID_JAR:
        return SpecialArtifact.ANDROID
    return None
