import asyncio

import pytest

from comptree.analysis.scanner import component_paths_in_directory

from conftest import FIXTURE_SRC, component_source, fixture_path, write_files


def test_fixture_source_directory():
    paths = asyncio.run(component_paths_in_directory(FIXTURE_SRC))
    assert sorted(paths) == sorted([
        fixture_path("App.jsx"),
        fixture_path("components", "TestClassComponent.js"),
        fixture_path("components", "TestPureComponent.jsx"),
        fixture_path("components", "TestAnonComponent.jsx"),
    ])


def test_nested_directories_come_before_current_files(tmp_path):
    paths = write_files(tmp_path, {
        "Top.jsx": component_source("Top"),
        "a/b/Deep.jsx": component_source("Deep"),
        "a/Middle.js": component_source("Middle"),
        "a/notes.md": "# notes\n",
        "a/util.js": "export default function util() { return 1; }\n",
    })
    found = asyncio.run(component_paths_in_directory(str(tmp_path)))
    assert found == [paths["a/b/Deep.jsx"], paths["a/Middle.js"], paths["Top.jsx"]]


def test_empty_directory(tmp_path):
    assert asyncio.run(component_paths_in_directory(str(tmp_path))) == []


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        asyncio.run(component_paths_in_directory(str(tmp_path / "missing")))
