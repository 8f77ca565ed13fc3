"""Tests for oaslint.parser.version."""

from __future__ import annotations

import pytest

from oaslint.exceptions import VersionError
from oaslint.models import ResolvedVersion, SpecVersion
from oaslint.parser.version import NO_VERSION_MESSAGE, require_supported, resolve_version


class TestResolveVersion:
    @pytest.mark.parametrize(
        ("document", "expected"),
        [
            ({"openapi": "3.0.0"}, SpecVersion.OPENAPI_3_0),
            ({"openapi": "3.0.3"}, SpecVersion.OPENAPI_3_0),
            ({"openapi": "3.1.0"}, SpecVersion.OPENAPI_3_1),
            ({"openapi": "3.1.1"}, SpecVersion.OPENAPI_3_1),
            ({"swagger": "2.0"}, SpecVersion.SWAGGER_2_0),
        ],
    )
    def test_supported_versions(self, document, expected) -> None:
        version = resolve_version(document)
        assert version.kind is expected
        assert version.supported

    @pytest.mark.parametrize(
        "document",
        [
            {"openapi": "3.2.0"},
            {"openapi": "4.0.0"},
            {"openapi": "3.0"},
            {"openapi": "3.0.0-rc1"},
            {"swagger": "1.2"},
            {"swagger": "2.0.1"},
        ],
    )
    def test_unsupported_versions_keep_literal(self, document) -> None:
        version = resolve_version(document)
        assert version.kind is SpecVersion.UNKNOWN
        assert version.detected
        assert not version.supported
        assert version.display == next(iter(document.values()))

    def test_openapi_key_wins_over_swagger(self) -> None:
        version = resolve_version({"openapi": "3.1.0", "swagger": "2.0"})
        assert version.kind is SpecVersion.OPENAPI_3_1

    def test_no_version_key(self) -> None:
        version = resolve_version({"info": {"title": "x"}})
        assert version == ResolvedVersion(kind=SpecVersion.UNKNOWN)
        assert not version.detected
        assert version.display == "unknown"

    def test_empty_and_null_values_count_as_undeclared(self) -> None:
        assert not resolve_version({"openapi": ""}).detected
        assert not resolve_version({"swagger": None}).detected

    def test_unquoted_yaml_float_is_displayed_but_unsupported(self) -> None:
        version = resolve_version({"swagger": 2.0})
        assert version.kind is SpecVersion.UNKNOWN
        assert version.literal == "2.0"

    def test_numeric_openapi_value_is_unsupported(self) -> None:
        assert resolve_version({"openapi": 3.1}).kind is SpecVersion.UNKNOWN

    def test_boolean_value_is_lowercased(self) -> None:
        assert resolve_version({"openapi": True}).literal == "true"


class TestRequireSupported:
    def test_supported_passes(self) -> None:
        require_supported(ResolvedVersion(kind=SpecVersion.OPENAPI_3_0, literal="3.0.0"))

    def test_missing_version_message(self) -> None:
        with pytest.raises(VersionError) as exc_info:
            require_supported(ResolvedVersion(kind=SpecVersion.UNKNOWN))
        assert exc_info.value.message == NO_VERSION_MESSAGE

    def test_unsupported_version_message(self) -> None:
        with pytest.raises(VersionError, match="Unsupported OpenAPI version: 1.0"):
            require_supported(ResolvedVersion(kind=SpecVersion.UNKNOWN, literal="1.0"))
