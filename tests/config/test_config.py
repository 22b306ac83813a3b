"""Tests for the readtrack configuration.

Copyright © 2023 Pixelgen Technologies AB.
"""

import pydantic
import pytest

from readtrack.config import StageFiles, TrackingConfig, load_yaml_file


def test_default_config():
    config = TrackingConfig()
    assert config.sample_name_delimiter == "_"
    assert config.check_decay is True
    assert config.stage_files == StageFiles()
    assert config.stage_files.nonchim_table == "chimera/seqtab_nochim.csv"


def test_config_from_yaml(tmp_path):
    path = tmp_path / "readtrack.yaml"
    path.write_text(
        "sample_name_delimiter: '-'\n"
        "check_decay: false\n"
        "stage_files:\n"
        "  merged: pairs/merged.json\n"
    )

    config = TrackingConfig.from_yaml(path)

    assert config.sample_name_delimiter == "-"
    assert config.check_decay is False
    assert config.stage_files.merged == "pairs/merged.json"
    assert config.stage_files.filter_stats == "filter/filter_stats.csv"


def test_config_from_empty_yaml(tmp_path):
    path = tmp_path / "readtrack.yml"
    path.write_text("")
    assert TrackingConfig.from_yaml(path) == TrackingConfig()


@pytest.mark.parametrize(
    "content",
    [
        "unknown_key: 1\n",
        "sample_name_delimiter: ''\n",
        "stage_files:\n  taxonomy: taxa.csv\n",
    ],
)
def test_config_rejects_invalid_yaml(tmp_path, content):
    path = tmp_path / "readtrack.yaml"
    path.write_text(content)

    with pytest.raises(pydantic.ValidationError):
        TrackingConfig.from_yaml(path)


def test_load_yaml_file_errors(tmp_path):
    with pytest.raises(FileExistsError):
        load_yaml_file(tmp_path / "missing.yaml")

    not_yaml = tmp_path / "config.json"
    not_yaml.write_text("{}")
    with pytest.raises(TypeError):
        load_yaml_file(not_yaml)
