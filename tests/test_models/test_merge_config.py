"""Tests for merge configuration and outcome models."""

import json
from pathlib import Path

import pytest

from gridmerge.exceptions import ConfigurationError
from gridmerge.models.enums import MergeStrategy
from gridmerge.models.merge import MergeConfig, MergeOutcome


class TestMergeConfig:
    def test_defaults(self):
        config = MergeConfig()
        assert config.by == []
        assert config.preserve == []
        assert config.auto_detect is True
        assert config.identity_field is None

    def test_camel_case_keys(self):
        config = MergeConfig.model_validate(
            {
                "by": ["drCode", "date"],
                "preserve": ["drName"],
                "autoDetectMergeFields": False,
                "identityField": "drCode",
                "mergeStrategy": "combine",
            }
        )
        assert config.by == ["drCode", "date"]
        assert config.auto_detect is False
        assert config.identity_field == "drCode"

    def test_snake_case_keys(self):
        config = MergeConfig.model_validate({"auto_detect": False, "identity_field": "id"})
        assert config.auto_detect is False
        assert config.identity_field == "id"

    def test_from_file(self, tmp_path: Path):
        path = tmp_path / "merge.json"
        path.write_text(json.dumps({"by": ["id"], "preserve": ["name"]}))
        config = MergeConfig.from_file(path)
        assert config.by == ["id"]
        assert config.preserve == ["name"]

    def test_from_file_missing(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="file not found"):
            MergeConfig.from_file(tmp_path / "nope.json")

    def test_from_file_invalid_json(self, tmp_path: Path):
        path = tmp_path / "merge.json"
        path.write_text("{by: ")
        with pytest.raises(ConfigurationError, match="invalid JSON"):
            MergeConfig.from_file(path)

    def test_from_file_not_an_object(self, tmp_path: Path):
        path = tmp_path / "merge.json"
        path.write_text("[]")
        with pytest.raises(ConfigurationError, match="expected a JSON object"):
            MergeConfig.from_file(path)

    def test_from_file_wrong_types(self, tmp_path: Path):
        path = tmp_path / "merge.json"
        path.write_text(json.dumps({"by": "id"}))
        with pytest.raises(ConfigurationError) as exc_info:
            MergeConfig.from_file(path)
        assert exc_info.value.field == "by"


class TestMergeOutcome:
    def test_merged_flag(self):
        assert MergeOutcome(strategy=MergeStrategy.MERGED).merged
        assert not MergeOutcome(strategy=MergeStrategy.GROUP_TAGGED).merged
        assert not MergeOutcome(strategy=MergeStrategy.PASSTHROUGH).merged
