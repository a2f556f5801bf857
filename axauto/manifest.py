# axauto/manifest.py
"""
@file manifest.py
@brief Capability manifests and typed wrapper generation.

A manifest records, per role, which attributes and actions elements of an
application expose. From it, generate_wrappers() emits plain Python classes
with one property per attribute and one method per action, so production
code gets named accessors without binding anything at runtime.
"""

from __future__ import annotations

import json
import keyword
import logging
import os
import re
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set

import jsonschema
import yaml

from .capabilities import accessor_name, snake_case
from .config import AXConfig
from .exceptions import ConfigError

if TYPE_CHECKING:
    from .node import Node

log = logging.getLogger("axauto.manifest")

MANIFEST_VERSION = 1
_SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schemas", "manifest.schema.json")


def record_manifest(
    root: "Node",
    max_depth: Optional[int] = None,
    application: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Walk root's cached subtree and collect capability names per role.

    @param max_depth Levels below root to visit (None = whole subtree)
    """
    cfg = AXConfig.current()
    roles: Dict[str, Dict[str, Set[str]]] = {}
    seen = set()
    stack = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if cfg.cycle_guard:
            if node.identity in seen:
                continue
            seen.add(node.identity)

        role = str(node.get("role") or cfg.unknown_role)
        entry = roles.setdefault(role, {"attributes": set(), "actions": set()})
        entry["attributes"].update(node.attribute_names)
        entry["actions"].update(node.action_names)

        if max_depth is None or depth < max_depth:
            for child in reversed(node.cached_children):
                stack.append((child, depth + 1))

    return {
        "version": MANIFEST_VERSION,
        "application": application,
        "roles": {
            role: {
                "attributes": sorted(entry["attributes"]),
                "actions": sorted(entry["actions"]),
            }
            for role, entry in sorted(roles.items())
        },
    }


def validate_manifest(manifest: Any) -> Dict[str, Any]:
    with open(_SCHEMA_PATH, "r", encoding="utf-8") as f:
        schema = json.load(f)
    try:
        jsonschema.validate(instance=manifest, schema=schema)
    except jsonschema.ValidationError as e:
        where = ".".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"Invalid capability manifest at {where}: {e.message}") from e
    return manifest


def save_manifest(manifest: Dict[str, Any], path: str) -> str:
    validate_manifest(manifest)
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(manifest, f, sort_keys=False, allow_unicode=True)
    log.info("Wrote capability manifest: %s (%d roles)", path, len(manifest["roles"]))
    return path


def load_manifest(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        raise ConfigError(f"Capability manifest not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}") from e
    return validate_manifest(data)


# =========================================================
# Wrapper generation
# =========================================================

# Members of the generated classes themselves.
_WRAPPER_MEMBERS = {"node", "ROLE"}


def _doc_text(text: str) -> str:
    return re.sub(r'["\\]', "", text)


def _class_name(role: str) -> str:
    base = re.sub(r"[^0-9a-zA-Z]+", "", role) or "Unknown"
    if base[0].isdigit():
        base = f"_{base}"
    return f"{base}Element"


def _member_name(native: str, taken: Set[str]) -> Optional[str]:
    name = snake_case(accessor_name(native))
    name = re.sub(r"\W", "_", name)
    if not name or name[0].isdigit():
        name = f"_{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"
    if name in taken or name in _WRAPPER_MEMBERS:
        log.debug("Skipping %s: accessor %s already used", native, name)
        return None
    taken.add(name)
    return name


def generate_wrappers(manifest: Dict[str, Any]) -> str:
    """Emit Python source with one wrapper class per recorded role."""
    validate_manifest(manifest)
    app = _doc_text(manifest.get("application") or "unknown application")

    out: List[str] = [
        f'"""Typed element wrappers generated from the capability manifest of {app}."""',
        "",
        "from axauto.capabilities import CallResult",
        "from axauto.node import Node",
    ]

    classes: Set[str] = set()
    for role, caps in manifest["roles"].items():
        taken: Set[str] = set()
        cls = _class_name(role)
        while cls in classes:
            cls += "_"
        classes.add(cls)
        out += [
            "",
            "",
            f"class {cls}:",
            f'    """{_doc_text(role)} element."""',
            "",
            f"    ROLE = {role!r}",
            "",
            "    def __init__(self, node: Node):",
            "        self.node = node",
        ]
        for native in caps["attributes"]:
            name = _member_name(native, taken)
            if name is None:
                continue
            out += [
                "",
                "    @property",
                f"    def {name}(self):",
                f"        return self.node.read_attribute({native!r}).value",
            ]
        for native in caps["actions"]:
            name = _member_name(native, taken)
            if name is None:
                continue
            out += [
                "",
                f"    def {name}(self) -> CallResult:",
                f"        return self.node.perform({native!r})",
            ]

    return "\n".join(out) + "\n"


def write_wrappers(manifest: Dict[str, Any], out_path: str) -> str:
    source = generate_wrappers(manifest)
    os.makedirs(os.path.dirname(os.path.abspath(out_path)) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(source)
    return out_path
