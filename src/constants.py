"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    EXIT_WARNINGS = 3


class OriginKind(Enum):
    """Kinds of origin references understood by the resolver.

    Args:
        Enum (string): Origin kind.
    """

    PACKAGED = "jar"
    LOCAL = "file"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    CENTRAL_REPO_ID = "central"
    CENTRAL_REPO_URL = "https://repo1.maven.org/maven2/"
    DEFAULT_UNIT_TYPE = "JavaArtifact"
    DEFAULT_SCOPE = "compile"
    POM_SUFFIX = ".pom"
    OVERRIDES_RESOURCE = "resolver.properties"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for each POM fetch attempt

    # Special artifacts
    JRE_LIB_MARKERS = ["jre/lib/", "/jmods/"]
    TOOLS_JAR = "tools.jar"
    NASHORN_JAR = "nashorn.jar"
    ANDROID_JAR = "android.jar"

    JDK_UNIT = "JDK"
    JDK_CLONE_URL = "https://github.com/openjdk/jdk"
    LANGTOOLS_UNIT = "JavaLangTools"
    LANGTOOLS_CLONE_URL = "https://github.com/openjdk/jdk"
    NASHORN_UNIT = "Nashorn"
    NASHORN_CLONE_URL = "https://github.com/openjdk/nashorn"
    ANDROID_UNIT = "AndroidSDK"
    ANDROID_CLONE_URL = "https://android.googlesource.com/platform/frameworks/base"

    # Environment
    ENV_LOG_LEVEL = "ORIGINMAP_LOG_LEVEL"
    ENV_CONFIG = "ORIGINMAP_CONFIG"
