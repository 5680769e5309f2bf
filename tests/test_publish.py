"""Tests for publish coordinate resolution and upload."""

import hashlib

import httpx
import pytest

from specforge.loader import load_spec
from specforge.publish import (
    LEGACY_ARTIFACT_ID,
    ArtifactIdMode,
    PublishCoordinate,
    TokenSource,
    publish,
    resolve_artifact_id,
    resolve_coordinate,
    resolve_token,
    resolve_version,
)
from specforge.settings import REGISTRY_URL, load_settings

TOKEN = "glpat-secret"


def _coordinate(**overrides) -> PublishCoordinate:
    values = {
        "group": "com.gini",
        "artifact_id": "car-module-openapi",
        "version": "1.0.0",
        "registry_url": "https://registry.example/maven/",
        "header_name": "Deploy-Token",
        "token": TOKEN,
    }
    values.update(overrides)
    return PublishCoordinate(**values)


class TestArtifactId:
    """Revised deployments publish one artifact per spec name."""

    def test_spec_name_mode(self):
        assert resolve_artifact_id("car-module-openapi", ArtifactIdMode.SPEC_NAME) == "car-module-openapi"

    def test_fixed_mode(self):
        assert resolve_artifact_id("car-module-openapi", "fixed") == LEGACY_ARTIFACT_ID

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            resolve_artifact_id("x", "random")


class TestToken:
    """Test where the registry token is read from."""

    def test_property_source(self):
        assert resolve_token({"registryToken": TOKEN}, TokenSource.PROPERTY, environ={}) == TOKEN

    def test_property_source_ignores_environment(self):
        assert resolve_token({}, "property", environ={"CI_JOB_TOKEN": TOKEN}) is None

    def test_environment_source(self):
        assert resolve_token({}, TokenSource.ENVIRONMENT, environ={"CI_JOB_TOKEN": TOKEN}) == TOKEN

    def test_empty_is_missing(self):
        assert resolve_token({"registryToken": ""}, "property") is None


class TestVersion:
    """Test publish version precedence."""

    def test_property_wins(self):
        assert resolve_version({"version": "2.0.0"}, {"info": {"version": "1.2.0"}}) == "2.0.0"

    def test_spec_version(self):
        assert resolve_version({}, {"info": {"version": "1.2.0"}}) == "1.2.0"

    def test_default(self):
        assert resolve_version({}, None) == "1.0.0"

    def test_unquoted_spec_version_keeps_trailing_zero(self, tmp_path):
        path = tmp_path / "spec.yaml"
        path.write_text("openapi: 3.0.3\ninfo:\n  version: 1.10\n")
        assert resolve_version({}, load_spec(path)) == "1.10"

    def test_null_info_falls_back_to_default(self, tmp_path):
        path = tmp_path / "spec.yaml"
        path.write_text("openapi: 3.0.3\ninfo:\npaths:\n")
        assert resolve_version({}, load_spec(path)) == "1.0.0"


class TestResolveCoordinate:
    """Test building a publish coordinate from settings."""

    def test_revised_defaults(self, project):
        settings = load_settings(
            project, {"openApiFileName": "car-module-openapi", "registryToken": TOKEN},
        )
        coordinate = resolve_coordinate(settings, "1.2.0", environ={})
        assert coordinate.group == "com.gini"
        assert coordinate.artifact_id == "car-module-openapi"
        assert coordinate.registry_url == REGISTRY_URL
        assert coordinate.token == TOKEN

    def test_legacy_variant(self, project):
        (project / "specforge.yml").write_text(
            "artifact_id_mode: fixed\ntoken_source: environment\n"
        )
        settings = load_settings(project, {"openApiFileName": "car-module-openapi"})
        coordinate = resolve_coordinate(settings, "1.0.0", environ={"CI_JOB_TOKEN": TOKEN})
        assert coordinate.artifact_id == LEGACY_ARTIFACT_ID
        assert coordinate.token == TOKEN

    def test_repr_hides_token(self):
        assert TOKEN not in repr(_coordinate())

    def test_urls(self):
        coordinate = _coordinate()
        assert coordinate.base_url == (
            "https://registry.example/maven/com/gini/car-module-openapi/1.0.0"
        )
        assert coordinate.url_for("a.jar").endswith("/1.0.0/a.jar")


class TestPublish:
    """Test uploads against an in-memory registry."""

    @pytest.fixture
    def artifacts(self, tmp_path):
        jar = tmp_path / "car-module-openapi-1.0.0-javagenerated.jar"
        pom = tmp_path / "car-module-openapi-1.0.0.pom"
        jar.write_bytes(b"jar-bytes")
        pom.write_text("<project/>")
        return [jar, pom]

    def _client(self, requests, status=201):
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(status)
        return httpx.Client(transport=httpx.MockTransport(handler))

    def test_uploads_files_and_checksums(self, artifacts):
        requests = []
        urls = publish(_coordinate(), artifacts, client=self._client(requests))

        base = "https://registry.example/maven/com/gini/car-module-openapi/1.0.0/"
        assert urls == [
            base + "car-module-openapi-1.0.0-javagenerated.jar",
            base + "car-module-openapi-1.0.0-javagenerated.jar.sha1",
            base + "car-module-openapi-1.0.0-javagenerated.jar.md5",
            base + "car-module-openapi-1.0.0.pom",
            base + "car-module-openapi-1.0.0.pom.sha1",
            base + "car-module-openapi-1.0.0.pom.md5",
        ]
        assert [str(r.url) for r in requests] == urls
        assert all(r.method == "PUT" for r in requests)
        assert requests[0].content == b"jar-bytes"
        assert requests[1].content == hashlib.sha1(b"jar-bytes").hexdigest().encode()

    def test_token_header(self, artifacts):
        requests = []
        publish(_coordinate(header_name="Job-Token"), artifacts, client=self._client(requests))
        assert all(r.headers["Job-Token"] == TOKEN for r in requests)

    def test_missing_token_sends_nothing(self, artifacts):
        requests = []
        with pytest.raises(ValueError, match="registryToken"):
            publish(_coordinate(token=None), artifacts, client=self._client(requests))
        assert requests == []

    def test_missing_file_sends_nothing(self, artifacts, tmp_path):
        requests = []
        with pytest.raises(FileNotFoundError):
            publish(_coordinate(), [*artifacts, tmp_path / "gone.jar"], client=self._client(requests))
        assert requests == []

    def test_registry_error(self, artifacts):
        requests = []
        with pytest.raises(httpx.HTTPStatusError):
            publish(_coordinate(), artifacts, client=self._client(requests, status=403))
        assert len(requests) == 1

    def test_dry_run(self, artifacts):
        requests = []
        urls = publish(_coordinate(token=None), artifacts, client=self._client(requests), dry_run=True)
        assert len(urls) == 6
        assert requests == []
