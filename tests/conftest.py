import os
import textwrap

import pytest

from comptree.core.engine.ast_handler import get_ast_handler
from comptree.models.config import ProjectConfig

FIXTURE_ROOT = os.path.join(os.path.dirname(__file__), "fixtures", "test-input")
FIXTURE_SRC = os.path.join(FIXTURE_ROOT, "src")


def fixture_path(*parts):
    return os.path.join(FIXTURE_SRC, *parts)


def parse_code(code):
    """Parse a dedented snippet, returning (root_node, code_bytes)."""
    return get_ast_handler().parse(textwrap.dedent(code))


def write_files(root, files):
    """Create ``files`` ({relative path: source}) under ``root``; return absolute paths."""
    paths = {}
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(content))
        paths[rel] = str(target)
    return paths


def component_source(name, body="<div />", imports=()):
    """Source of a function component ``name`` returning ``body``."""
    lines = ["import React from 'react';"]
    lines.extend(f"import {imp} from './{imp}';" for imp in imports)
    lines.append("")
    lines.append(f"function {name}() {{")
    lines.append(f"  return ({body});")
    lines.append("}")
    lines.append("")
    lines.append(f"export default {name};")
    return "\n".join(lines) + "\n"


@pytest.fixture
def fixture_config():
    return ProjectConfig(
        root_component_path=fixture_path("App.jsx"),
        src_path=FIXTURE_SRC,
        client_path=FIXTURE_ROOT,
    )
