import asyncio
import json
import os

import pytest

from comptree.analysis.classifier import is_component
from comptree.core.config import Configuration, config
from comptree.core.error_handling import InvalidConfigurationError
from comptree.models.config import ProjectConfig

from conftest import component_source, write_files


def test_camel_case_config_file(tmp_path):
    (tmp_path / "src").mkdir()
    config_file = tmp_path / "redez.config.json"
    config_file.write_text(json.dumps({
        "rootComponentPath": "src/App.jsx",
        "srcPath": "src",
    }))
    project = ProjectConfig.from_file(str(config_file))
    assert project.root_component_path == str(tmp_path / "src" / "App.jsx")
    assert project.src_path == str(tmp_path / "src")
    assert project.client_path == str(tmp_path)
    assert project.log_asts is False


def test_absolute_paths_are_kept(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({
        "root_component_path": "/project/src/App.jsx",
        "src_path": "/project/src",
        "client_path": "/project",
        "logASTs": True,
    }))
    project = ProjectConfig.from_file(str(config_file))
    assert project.root_component_path == os.path.abspath("/project/src/App.jsx")
    assert project.client_path == os.path.abspath("/project")
    assert project.log_asts is True


def test_project_path_defaults_to_parent_of_src():
    project = ProjectConfig(root_component_path="/p/src/App.jsx", src_path="/p/src")
    assert project.project_path == os.path.abspath("/p")


def test_missing_setting_is_reported(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"srcPath": "src"}))
    with pytest.raises(InvalidConfigurationError) as excinfo:
        ProjectConfig.from_file(str(config_file))
    assert "rootComponentPath" in excinfo.value.setting


def test_unreadable_config_file(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")
    with pytest.raises(InvalidConfigurationError):
        ProjectConfig.from_file(str(config_file))
    with pytest.raises(InvalidConfigurationError):
        ProjectConfig.from_file(str(tmp_path / "missing.json"))


def test_validate_paths(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "App.jsx").write_text("")
    project = ProjectConfig(root_component_path=str(tmp_path / "src" / "App.jsx"), src_path=str(tmp_path / "src"))
    assert project.validate_paths() is project
    with pytest.raises(InvalidConfigurationError):
        ProjectConfig(root_component_path=str(tmp_path / "App.jsx"), src_path=str(tmp_path / "src")).validate_paths()
    with pytest.raises(InvalidConfigurationError):
        ProjectConfig(root_component_path=str(tmp_path / "src" / "App.jsx"), src_path=str(tmp_path / "x")).validate_paths()


def test_configuration_is_a_singleton():
    assert Configuration() is config
    assert config.get("scanner", "extensions") == ["js", "jsx"]
    assert config.get("scanner", "missing", "fallback") == "fallback"


def test_configured_extensions_drive_classification(tmp_path):
    paths = write_files(tmp_path, {"Widget.tsx": component_source("Widget")})
    try:
        config.set("scanner", "extensions", ["js", "jsx", "tsx"])
        assert asyncio.run(is_component(paths["Widget.tsx"])) is True
    finally:
        config.reset()
    assert asyncio.run(is_component(paths["Widget.tsx"])) is False
