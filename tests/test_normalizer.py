"""Tests for the normalizer module."""

import pytest

from docgen.errors import GenerateError
from docgen.model import ApiDocument, Operation, PathItem, ResponseSpec
from docgen.normalizer import normalize


class TestNormalize:
    """Test canonical path and response ordering."""

    def test_paths_sorted_ordinal(self, document):
        result = normalize(document)
        assert list(result.paths) == ["/Pets", "/orders", "/pets", "/pets/{petId}"]

    def test_paths_non_decreasing(self, document):
        keys = list(normalize(document).paths)
        assert all(a <= b for a, b in zip(keys, keys[1:]))

    def test_responses_sorted_lexicographically(self, document):
        op = normalize(document).paths["/pets/{petId}"].get
        assert list(op.responses) == ["200", "404", "500"]

    def test_lexicographic_not_numeric(self, document):
        op = normalize(document).paths["/pets/{petId}"].delete
        assert list(op.responses) == ["1000", "204"]

    def test_every_method_slot_sorted(self):
        unsorted = {"503": ResponseSpec(), "200": ResponseSpec(), "302": ResponseSpec()}
        item = PathItem(**{
            name: Operation(responses=dict(unsorted))
            for name in ("get", "delete", "post", "put", "options", "patch")
        })
        result = normalize(ApiDocument(paths={"/x": item}))
        for _, op in result.paths["/x"].operations():
            assert list(op.responses) == ["200", "302", "503"]

    def test_unknown_methods_left_alone(self, document):
        item = normalize(document).paths["/pets"]
        assert list(item.extra["head"]["responses"]) == ["500", "200"]

    def test_idempotent(self, document):
        once = normalize(document)
        twice = normalize(once)
        assert twice == once
        assert list(twice.paths) == list(once.paths)
        for path in once.paths:
            for (_, a), (_, b) in zip(once.paths[path].operations(), twice.paths[path].operations()):
                assert list(a.responses) == list(b.responses)

    def test_input_not_mutated(self, document):
        original_paths = list(document.paths)
        original_codes = list(document.paths["/pets/{petId}"].get.responses)
        result = normalize(document)
        assert result is not document
        assert list(document.paths) == original_paths
        assert list(document.paths["/pets/{petId}"].get.responses) == original_codes

    def test_metadata_preserved(self, document):
        result = normalize(document)
        assert result.info == document.info
        assert result.base_path == "/v1"
        assert result.extra == document.extra

    def test_empty_document(self):
        assert normalize(ApiDocument()).paths == {}


class TestIncompatibleShape:
    """Test the structural consistency check."""

    def test_raw_dict_path_item(self):
        doc = ApiDocument(paths={"/a": {"get": {"responses": {}}}})
        with pytest.raises(GenerateError, match="/a"):
            normalize(doc)

    def test_foreign_object_in_slot(self):
        doc = ApiDocument(paths={"/a": PathItem(get={"responses": {}})})
        with pytest.raises(GenerateError, match="GET"):
            normalize(doc)

    def test_missing_slot_attribute(self):
        class Broken(PathItem):
            @property
            def patch(self):
                raise AttributeError("patch")

        doc = ApiDocument(paths={"/a": Broken.__new__(Broken)})
        with pytest.raises(GenerateError, match="PATCH"):
            normalize(doc)

    def test_paths_not_a_mapping(self):
        with pytest.raises(GenerateError, match="paths must be a mapping"):
            normalize(ApiDocument(paths=None))

    def test_not_a_document(self):
        with pytest.raises(GenerateError, match="Expected ApiDocument"):
            normalize({"paths": {}})

    def test_responses_not_a_mapping(self):
        doc = ApiDocument(paths={"/a": PathItem(get=Operation(responses=["200"]))})
        with pytest.raises(GenerateError, match="Responses under"):
            normalize(doc)
