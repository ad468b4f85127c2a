# Tests for stack templates
import json
from pathlib import Path

import pytest

from mcpstack.connectors import get_connector
from mcpstack.stacks import get_all_stack_names, get_all_stacks, get_stack, load_stack


def test_stack_order():
    assert get_all_stack_names() == ["saas-ts", "automation", "ai-builder", "fullstack"]


def test_every_stack_references_known_connectors():
    for stack in get_all_stacks():
        assert stack.mcps, stack.name
        for name in stack.mcps:
            assert get_connector(name) is not None, f"{stack.name}: {name}"


def test_saas_ts_contents():
    stack = get_stack("saas-ts")
    assert stack.mcps == ["supabase", "vercel", "github", "context7"]
    assert "next.config.js" in stack.detection_files


def test_unknown_stack():
    assert get_stack("missing") is None


def test_load_stack_requires_fields(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text(json.dumps({"name": "broken", "description": "no mcps"}))
    with pytest.raises(ValueError, match="mcps"):
        load_stack(path)


def test_load_stack_without_detection(tmp_path: Path):
    path = tmp_path / "mini.json"
    path.write_text(json.dumps({"name": "mini", "description": "d", "mcps": ["github"]}))
    stack = load_stack(path)
    assert stack.detection_files == []
    assert stack.detection_dependencies == []
