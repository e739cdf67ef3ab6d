from __future__ import annotations

import logging
from importlib import metadata
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

MODULES_PATH = Path(__file__).parent.parent / "modules"
ENTRYPOINT_GROUP = "textkit.modules"
MANIFEST_NAME = "module.yaml"


def _normalize_module(
    data: Dict[str, Any],
    *,
    source: str,
    path: Path | None = None,
    entry_point: str | None = None,
) -> Dict[str, Any] | None:
    name = data.get("name")
    if not name:
        return None

    slug = data.get("slug") or name.replace("_", "-")
    mount = data.get("mount") or f"/{slug}"
    if not mount.startswith("/"):
        mount = "/" + mount
    public = data.get("public")
    if public is None:
        public = True

    normalized = {**data}
    normalized.update(
        {
            "name": name,
            "slug": slug,
            "mount": mount,
            "public": bool(public),
            "source": source,
        }
    )

    if path is not None:
        normalized["path"] = path
    if entry_point is not None:
        normalized["entry_point"] = entry_point

    return normalized


def read_manifest(module_dir: Path) -> Dict[str, Any]:
    manifest = module_dir / MANIFEST_NAME
    with open(manifest, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{manifest} must contain a mapping")
    return data


def load_filesystem_modules(modules_path: Path = MODULES_PATH) -> Dict[str, Dict[str, Any]]:
    modules: Dict[str, Dict[str, Any]] = {}
    if not modules_path.exists():
        return modules

    for module_dir in sorted(modules_path.iterdir()):
        if not module_dir.is_dir() or not (module_dir / MANIFEST_NAME).exists():
            continue
        try:
            data = read_manifest(module_dir)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.warning("skipping module %s: %s", module_dir.name, exc)
            continue
        normalized = _normalize_module(data, source="filesystem", path=module_dir)
        if normalized:
            modules[normalized["name"]] = normalized
    return modules


def load_entrypoint_modules(
    group: str = ENTRYPOINT_GROUP,
) -> Dict[str, Dict[str, Any]]:
    modules: Dict[str, Dict[str, Any]] = {}

    for entry in metadata.entry_points(group=group):
        try:
            obj = entry.load()
        except Exception:
            logger.warning("failed to load entry point %s", entry.name, exc_info=True)
            continue

        data = obj() if callable(obj) else obj
        if not isinstance(data, dict):
            logger.warning("entry point %s did not return a mapping", entry.name)
            continue

        normalized = _normalize_module(data, source="entry_point", entry_point=entry.name)
        if normalized:
            modules[normalized["name"]] = normalized

    return modules


def load_modules(modules_path: Path = MODULES_PATH) -> Dict[str, Dict[str, Any]]:
    modules = load_filesystem_modules(modules_path)
    entrypoint_modules = load_entrypoint_modules()

    for name, data in entrypoint_modules.items():
        if name not in modules:
            modules[name] = data

    return modules
