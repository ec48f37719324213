"""Tests for the default build model and platform resolver."""

from resolver.collaborators import AndroidSdkResolver, ArtifactPathIndex
from resolver.models import Origin, RawDependency
from resolver.special import SpecialArtifact, classify_artifact


class TestArtifactPathIndex:
    """Mapping archive paths back to dependencies."""

    def test_declared_dependency_matched_by_file_name(self):
        declared = RawDependency("org.lib", "widgets", "1.0", "runtime")
        index = ArtifactPathIndex([RawDependency("org.x", "other", "2.0"), declared])

        assert index.dep_for_artifact("/build/libs/widgets-1.0.jar") is declared
        assert index.dep_for_artifact("/build/libs/widgets-1.0-sources.jar") is declared

    def test_longest_declared_match_wins(self):
        short = RawDependency("org.x", "core", "1.0")
        longer = RawDependency("org.x", "core", "1.0-rc1")
        index = ArtifactPathIndex([short, longer])

        assert index.dep_for_artifact("/libs/core-1.0-rc1.jar") is longer

    def test_maven_local_repository_layout(self):
        index = ArtifactPathIndex()

        dep = index.dep_for_artifact(
            "/home/dev/.m2/repository/org/slf4j/slf4j-api/1.7.30/slf4j-api-1.7.30.jar"
        )

        assert dep == RawDependency("org.slf4j", "slf4j-api", "1.7.30", "compile")

    def test_gradle_cache_layout(self):
        index = ArtifactPathIndex()

        dep = index.dep_for_artifact(
            "/home/dev/.gradle/caches/modules-2/files-2.1/com.google.guava/guava/31.1-jre/"
            "60458f877d055d0c9114d9e1a2efb737b4bc282c/guava-31.1-jre.jar"
        )

        assert dep == RawDependency("com.google.guava", "guava", "31.1-jre", "compile")

    def test_unknown_layout(self):
        index = ArtifactPathIndex()

        assert index.dep_for_artifact("/opt/tools/thing.jar") is None
        assert index.dep_for_artifact("/repository/a/b/other.jar") is None


class TestAndroidSdkResolver:
    """Android platform archives."""

    def test_version_from_platform_directory(self):
        origin = Origin.parse("jar:file:/sdk/platforms/android-33/android.jar!/android/app/Activity.class")

        target = AndroidSdkResolver().resolve(origin)

        assert target.to_unit == "AndroidSDK"
        assert target.to_version == "33"
        assert target.is_external

    def test_unknown_layout_has_empty_version(self):
        target = AndroidSdkResolver().resolve(Origin.parse("jar:file:/tmp/android.jar"))

        assert target.to_version == ""


class TestClassifyArtifact:
    """Special archive classification order."""

    def test_classification(self):
        assert classify_artifact("/jdk/jre/lib/rt.jar") == SpecialArtifact.JDK
        assert classify_artifact("/jdk-17/jmods/java.base.jmod") == SpecialArtifact.JDK
        assert classify_artifact("/jdk/lib/tools.jar") == SpecialArtifact.LANGTOOLS
        assert classify_artifact("/x/nashorn.jar") == SpecialArtifact.NASHORN
        assert classify_artifact("/sdk/android.jar") == SpecialArtifact.ANDROID
        assert classify_artifact("/x/my-tools.jar") is None

    def test_windows_separators(self):
        assert classify_artifact("C:\\jdk\\jre\\lib\\rt.jar") == SpecialArtifact.JDK
