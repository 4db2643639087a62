"""Reading and writing devfile documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .spec import DevfileSpec

logger = logging.getLogger(__name__)

FORMATS = ("yaml", "json")


class MalformedDevfileError(RuntimeError):
    """Raised when a document cannot be decoded into a DevfileSpec."""


def parse_devfile(text: str, source: str = "<string>") -> DevfileSpec:
    """Decode a YAML or JSON devfile document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise MalformedDevfileError(f"Failed to parse devfile at {source}: {exc}") from exc

    if data is None:
        raise MalformedDevfileError(f"Devfile at {source} is empty")
    if not isinstance(data, dict):
        raise MalformedDevfileError(
            f"Devfile at {source} must be a mapping, got {type(data).__name__}"
        )

    try:
        return DevfileSpec.model_validate(data)
    except ValidationError as exc:
        raise MalformedDevfileError(f"Invalid devfile at {source}: {exc}") from exc


def load_devfile(path: Path) -> DevfileSpec:
    """Load a devfile from disk."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Devfile not found: {path}")

    logger.debug(f"Loading devfile from {path}")
    return parse_devfile(path.read_text(encoding="utf-8"), source=str(path))


def dump_devfile(spec: DevfileSpec, fmt: str = "yaml", indent: int = 2) -> str:
    """Serialize a devfile to its document form."""
    data = spec.to_dict()
    if fmt == "json":
        return json.dumps(data, indent=indent)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    raise ValueError(f"Unsupported format: {fmt} (expected one of {FORMATS})")


def save_devfile(path: Path, spec: DevfileSpec, fmt: Optional[str] = None) -> None:
    """Write a devfile, picking the format from the file suffix unless given."""
    path = Path(path)
    if fmt is None:
        fmt = "json" if path.suffix.lower() == ".json" else "yaml"

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_devfile(spec, fmt=fmt), encoding="utf-8")
    logger.info(f"Saved devfile to {path}")
