"""Tests for nostd_matrix.metadata."""

import json
from unittest.mock import MagicMock, patch

import pytest

from nostd_matrix.errors import MetadataError
from nostd_matrix.metadata import load_metadata, query_metadata


class TestLoadMetadata:
    def test_valid_document(self, metadata_doc) -> None:
        assert load_metadata(json.dumps(metadata_doc)) == metadata_doc

    def test_empty_input(self) -> None:
        with pytest.raises(MetadataError, match="empty"):
            load_metadata("")

    def test_invalid_json(self) -> None:
        with pytest.raises(MetadataError, match="not valid JSON"):
            load_metadata('{"packages": [')

    def test_missing_workspace_members(self) -> None:
        with pytest.raises(MetadataError, match="workspace_members"):
            load_metadata('{"packages": []}')

    def test_package_without_targets(self) -> None:
        doc = {"packages": [{"id": "a", "name": "a"}], "workspace_members": ["a"]}
        with pytest.raises(MetadataError, match="targets"):
            load_metadata(json.dumps(doc))

    def test_non_string_workspace_member(self) -> None:
        with pytest.raises(MetadataError, match="workspace_members"):
            load_metadata(json.dumps({"packages": [], "workspace_members": [["a"]]}))

    def test_non_string_target_kind(self) -> None:
        doc = {
            "packages": [{"id": "a", "name": "a", "targets": [{"kind": [["lib"]]}]}],
            "workspace_members": ["a"],
        }
        with pytest.raises(MetadataError, match="kind"):
            load_metadata(json.dumps(doc))

    def test_null_features_allowed(self) -> None:
        doc = {
            "packages": [{"id": "a", "name": "a", "features": None, "targets": []}],
            "workspace_members": ["a"],
        }
        assert load_metadata(json.dumps(doc))["packages"][0]["features"] is None


class TestQueryMetadata:
    def test_runs_cargo_metadata_no_deps(self, metadata_doc, tmp_path) -> None:
        manifest = tmp_path / "Cargo.toml"
        with patch(
            "nostd_matrix.metadata._run",
            return_value=MagicMock(returncode=0, stdout=json.dumps(metadata_doc), stderr=""),
        ) as m_run:
            doc = query_metadata(manifest)
        (cmd,) = m_run.call_args[0]
        assert cmd[:5] == ["cargo", "metadata", "--format-version", "1", "--no-deps"]
        assert cmd[-2:] == ["--manifest-path", str(manifest)]
        assert doc == metadata_doc

    def test_cargo_failure_is_metadata_error(self) -> None:
        with patch(
            "nostd_matrix.metadata._run",
            return_value=MagicMock(returncode=101, stdout="", stderr="could not find Cargo.toml"),
        ):
            with pytest.raises(MetadataError, match="could not find Cargo.toml"):
                query_metadata()

    def test_cargo_missing(self) -> None:
        with patch("nostd_matrix.metadata._run", side_effect=FileNotFoundError("cargo")):
            with pytest.raises(MetadataError, match="not found"):
                query_metadata(cargo="cargo")
