from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from textkit.engine import import_attr
from textkit.registry import read_manifest

REQUIRED_FIELDS = ("name", "title", "version", "description", "public", "category")
PUBLIC_FIELDS = ("entrypoints", "mount")


def _check_mount(mount_value: Any) -> List[str]:
    if not isinstance(mount_value, str):
        return ["mount must be a string"]
    issues: List[str] = []
    mount_value = mount_value.strip()
    if not mount_value.startswith("/"):
        issues.append("mount must start with /")
    if mount_value == "/":
        issues.append("mount '/' is reserved")
    elif mount_value.endswith("/"):
        issues.append("mount must not end with /")
    if " " in mount_value:
        issues.append("mount contains spaces")
    if "://" in mount_value or mount_value.startswith("//") or "\\" in mount_value:
        issues.append("mount must be a path")
    return issues


def lint_manifest(data: Dict[str, Any]) -> List[str]:
    issues: List[str] = []

    public = data.get("public")
    if public is None:
        public = True

    required = list(REQUIRED_FIELDS)
    if public:
        required.extend(PUBLIC_FIELDS)

    for field in required:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            issues.append(f"missing field: {field}")

    if public and data.get("mount") is not None:
        issues.extend(_check_mount(data["mount"]))

    entrypoints = data.get("entrypoints")
    if public and isinstance(entrypoints, dict):
        entrypoint = str(entrypoints.get("api") or "")
        if not entrypoint:
            issues.append("missing entrypoints.api")
        elif ":" not in entrypoint:
            issues.append("entrypoints.api must be module:attr")
        else:
            try:
                import_attr(entrypoint)
            except (ImportError, AttributeError) as exc:
                issues.append(f"entrypoint: {exc}")

    return issues


def lint_module(module_dir: Path) -> Dict[str, Any]:
    try:
        data = read_manifest(module_dir)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        return {"name": module_dir.name, "ok": False, "issues": [f"invalid module.yaml: {exc}"]}

    issues = lint_manifest(data)
    if not (module_dir / "core").is_dir():
        issues.append("missing core/")
    if data.get("public", True) and not (module_dir / "tool" / "app.py").exists():
        issues.append("missing tool/app.py")

    return {"name": str(data.get("name") or module_dir.name), "ok": not issues, "issues": issues}


def lint_modules(modules_dir: Path) -> List[Dict[str, Any]]:
    """Lint every module directory that carries a manifest, plus cross-module checks."""
    results: List[Dict[str, Any]] = []
    mounts: Dict[str, str] = {}

    for module_dir in sorted(modules_dir.iterdir()):
        if not (module_dir / "module.yaml").exists():
            continue
        result = lint_module(module_dir)
        try:
            data = read_manifest(module_dir)
        except (OSError, ValueError, yaml.YAMLError):
            data = {}
        mount = data.get("mount")
        if isinstance(mount, str) and mount:
            if mount in mounts:
                result["issues"].append(f"mount '{mount}' duplicates {mounts[mount]}")
                result["ok"] = False
            else:
                mounts[mount] = result["name"]
        results.append(result)

    return results
