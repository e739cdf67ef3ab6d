from __future__ import annotations

import logging
from importlib import import_module
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI

from textkit.errors import ValidationNormalizeMiddleware
from textkit.limits import RequestLimitsMiddleware, max_body_bytes, request_timeout_seconds
from textkit.registry import MODULES_PATH, load_modules
from textkit.settings import configure_logging

logger = logging.getLogger(__name__)

PUBLIC_FIELDS = ("name", "title", "version", "description", "category", "mount")


def import_attr(path: str) -> Any:
    if ":" not in path:
        raise ValueError(f"Invalid entrypoint '{path}'. Expected module:attr.")
    module_path, attr = path.split(":", 1)
    module = import_module(module_path)
    return getattr(module, attr)


def public_modules(modules: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    listed = [
        {field: meta.get(field) for field in PUBLIC_FIELDS}
        for meta in modules.values()
        if meta.get("public", True)
    ]
    listed.sort(key=lambda item: item.get("title") or item.get("name") or "")
    return listed


def build_app(modules_path: Path = MODULES_PATH) -> FastAPI:
    configure_logging()
    app = FastAPI(title="Textkit")

    modules = load_modules(modules_path)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/modules")
    def list_modules():
        return {"modules": public_modules(modules)}

    for meta in modules.values():
        entrypoints = meta.get("entrypoints") or {}
        api_entry = entrypoints.get("api")
        if not api_entry:
            continue

        try:
            subapp = import_attr(api_entry)
        except (ImportError, AttributeError, ValueError):
            logger.warning("skipping module %s: cannot import %s", meta["name"], api_entry, exc_info=True)
            continue

        mount_path = meta["mount"]
        app.mount(mount_path, subapp)
        logger.info("mounted %s at %s", meta["name"], mount_path)

    app.add_middleware(ValidationNormalizeMiddleware)
    app.add_middleware(
        RequestLimitsMiddleware,
        max_body=max_body_bytes(),
        timeout_seconds=request_timeout_seconds(),
    )
    return app
