from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import jsonschema
import yaml

DEFAULT_POLICY_PATH = Path(__file__).resolve().parent / "policy.yaml"
SCHEMA_PATH = Path(__file__).resolve().parent / "policy.schema.json"


@dataclass(frozen=True)
class Policy:
    """Which lockfile to read and which entries must carry which fields."""

    lockfile_name: str = "package-lock.json"
    dependency_prefix: str = "node_modules"
    link_field: str = "link"
    required_fields: tuple[str, ...] = ("integrity", "resolved")


def _read_schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def load_policy(path: Path = DEFAULT_POLICY_PATH) -> Policy:
    doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(doc, dict):
        raise ValueError(f"{path.name} must be a mapping")
    jsonschema.validate(instance=doc, schema=_read_schema())

    return Policy(
        lockfile_name=str(doc["lockfile_name"]),
        dependency_prefix=str(doc["dependency_prefix"]),
        link_field=str(doc["link_field"]),
        required_fields=tuple(doc["required_fields"]),
    )
