"""
Utility script to generate and write the OpenAPI schema for the FastAPI app.

Usage:
    python -m todo_api.generate_openapi [OUTPUT_PATH]

The default output path is interfaces/openapi.json under the current directory.
"""
from __future__ import annotations

import json
import os
import sys
from typing import Any, Dict, List, Optional

from .main import app, openapi_tags

DEFAULT_OUTPUT = os.path.join("interfaces", "openapi.json")


def _ensure_tags(schema: Dict[str, Any]) -> None:
    """
    Ensure the OpenAPI schema carries the tag metadata declared by the app,
    without overriding tags already present.
    """
    existing_tags: List[Dict[str, Any]] = schema.get("tags", []) or []
    existing_names = {t.get("name") for t in existing_tags if isinstance(t, dict)}
    for tag in openapi_tags:
        if tag.get("name") not in existing_names:
            existing_tags.append(tag)
    if existing_tags:
        schema["tags"] = existing_tags


# PUBLIC_INTERFACE
def generate_openapi(out_path: Optional[str] = None) -> str:
    """Write the OpenAPI schema to ``out_path`` and return the written file path."""
    path = out_path or DEFAULT_OUTPUT
    schema = app.openapi()
    _ensure_tags(schema)

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(schema, f, indent=2, ensure_ascii=False)
    return path


def main() -> None:
    out = generate_openapi(sys.argv[1] if len(sys.argv) > 1 else None)
    print(f"Wrote OpenAPI schema to: {out}")


if __name__ == "__main__":
    main()
