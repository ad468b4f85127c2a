# Stack template registry, loaded from bundled JSON data
import json
from pathlib import Path

from mcpstack.models import StackTemplate

# ABOUTME: Bundled stack files, in registry order
DATA_DIR = Path(__file__).parent / "data"
STACK_FILES = ("saas-ts.json", "automation.json", "ai-builder.json", "fullstack.json")


def load_stack(path: Path) -> StackTemplate:
    """Parse one stack template file.

    Raises:
        ValueError: If required fields are missing
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    for key in ("name", "description", "mcps"):
        if key not in data:
            raise ValueError(f"Stack file {path.name} missing required '{key}' field")

    detection = data.get("detection", {})
    return StackTemplate(
        name=data["name"],
        description=data["description"],
        mcps=list(data["mcps"]),
        detection_files=list(detection.get("files", [])),
        detection_dependencies=list(detection.get("dependencies", [])),
    )


STACKS: dict[str, StackTemplate] = {
    stack.name: stack
    for stack in (load_stack(DATA_DIR / filename) for filename in STACK_FILES)
}


def get_stack(name: str) -> StackTemplate | None:
    return STACKS.get(name)


def get_all_stack_names() -> list[str]:
    return list(STACKS)


def get_all_stacks() -> list[StackTemplate]:
    return list(STACKS.values())
