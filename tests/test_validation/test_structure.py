"""Tests for oaslint.validation.structure."""

from __future__ import annotations

import pytest

from oaslint.models import ValidationError
from oaslint.validation.structure import check_structure


def _pairs(errors: list[ValidationError]) -> list[tuple[str, str]]:
    return [(e.path, e.message) for e in errors]


class TestInfo:
    def test_missing_info(self) -> None:
        assert ("/info", "Required info object is missing") in _pairs(
            check_structure({"paths": {}})
        )

    def test_missing_title_and_version(self) -> None:
        assert _pairs(check_structure({"info": {}, "paths": {}})) == [
            ("/info/title", "API title is required"),
            ("/info/version", "API version is required"),
        ]

    def test_empty_strings_count_as_missing(self) -> None:
        errors = check_structure({"info": {"title": "", "version": "1"}, "paths": {}})
        assert _pairs(errors) == [("/info/title", "API title is required")]

    @pytest.mark.parametrize("info", [0, False, "text", ["T", "1"]])
    def test_non_mapping_info_is_reported_once(self, info) -> None:
        assert _pairs(check_structure({"info": info, "paths": {}})) == [
            ("/info", "Required info object is missing")
        ]


class TestPaths:
    def test_missing_paths(self) -> None:
        errors = check_structure({"info": {"title": "T", "version": "1"}})
        assert _pairs(errors) == [("/paths", "Required paths object is missing")]

    def test_paths_not_an_object(self) -> None:
        errors = check_structure({"info": {"title": "T", "version": "1"}, "paths": ["/a"]})
        assert _pairs(errors) == [("/paths", "Paths must be an object")]

    def test_path_item_not_an_object(self) -> None:
        errors = check_structure(
            {"info": {"title": "T", "version": "1"}, "paths": {"/a": "nope"}}
        )
        assert _pairs(errors) == [("/paths//a", "Path item must be an object")]

    def test_operation_checks(self, invalid_30_raw) -> None:
        assert _pairs(check_structure(invalid_30_raw)) == [
            ("/info/title", "API title is required"),
            ("/paths//orders/get", "Operation ID is missing"),
            ("/paths//orders/get/responses", "Responses object is missing"),
        ]

    def test_empty_responses_object_is_present(self) -> None:
        doc = {
            "info": {"title": "T", "version": "1"},
            "paths": {"/a": {"get": {"operationId": "a", "responses": {}}}},
        }
        assert check_structure(doc) == []

    def test_null_operation_reports_both(self) -> None:
        doc = {"info": {"title": "T", "version": "1"}, "paths": {"/a": {"post": None}}}
        assert [e.path for e in check_structure(doc)] == [
            "/paths//a/post",
            "/paths//a/post/responses",
        ]

    def test_trace_is_not_checked(self) -> None:
        doc = {"info": {"title": "T", "version": "1"}, "paths": {"/a": {"trace": {}}}}
        assert check_structure(doc) == []


class TestWholeDocuments:
    def test_valid_fixtures_pass(self, petstore_30_raw, petstore_31_raw, swagger_20_raw) -> None:
        for doc in (petstore_30_raw, petstore_31_raw, swagger_20_raw):
            assert check_structure(doc) == []

    def test_empty_document(self) -> None:
        assert _pairs(check_structure({})) == [
            ("/info", "Required info object is missing"),
            ("/paths", "Required paths object is missing"),
        ]
