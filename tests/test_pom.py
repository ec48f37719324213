"""Tests for POM URL construction and SCM parsing."""

import pytest

from resolver.pom import PomParseError, parse_scm_url, pom_url

POM_WITH_SCM = b"""<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>org.acme</groupId>
  <artifactId>widgets</artifactId>
  <version>1.0</version>
  <scm>
    <url> https://github.com/acme/widgets </url>
    <connection>scm:git:git://github.com/acme/widgets.git</connection>
  </scm>
</project>
"""

POM_WITHOUT_SCM = b"""<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>org.acme</groupId>
  <artifactId>widgets</artifactId>
  <version>1.0</version>
</project>
"""


class TestPomUrl:
    """POM URL layout."""

    def test_group_dots_become_slashes(self):
        url = pom_url("https://repo1.maven.org/maven2", "org.apache.commons", "commons-lang3", "3.12.0")

        assert url == (
            "https://repo1.maven.org/maven2/"
            "org/apache/commons/commons-lang3/3.12.0/commons-lang3-3.12.0.pom"
        )

    def test_trailing_slash_not_doubled(self):
        assert pom_url("https://repo/", "g", "a", "1") == "https://repo/g/a/1/a-1.pom"


class TestParseScmUrl:
    """SCM extraction from POM content."""

    def test_namespaced_pom(self):
        assert parse_scm_url(POM_WITH_SCM) == "https://github.com/acme/widgets"

    def test_byte_order_mark_is_stripped(self):
        assert parse_scm_url(b"\xef\xbb\xbf" + POM_WITH_SCM) == "https://github.com/acme/widgets"

    def test_pom_without_namespace(self):
        content = b"<project><scm><url>https://git/x</url></scm></project>"

        assert parse_scm_url(content) == "https://git/x"

    def test_missing_scm_returns_none(self):
        assert parse_scm_url(POM_WITHOUT_SCM) is None

    def test_blank_scm_url_returns_none(self):
        assert parse_scm_url(b"<project><scm><url>  </url></scm></project>") is None

    def test_scm_of_parent_block_is_ignored(self):
        content = b"<project><parent><scm><url>https://git/parent</url></scm></parent></project>"

        assert parse_scm_url(content) is None

    def test_malformed_xml_raises(self):
        with pytest.raises(PomParseError):
            parse_scm_url(b"<html><body>Not Found")

    def test_non_project_root_raises(self):
        with pytest.raises(PomParseError):
            parse_scm_url(b"<html><body>Not Found</body></html>")
