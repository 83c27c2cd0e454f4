from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Type, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


def load_fixture(base_dir: Path, name: str) -> Any:
    """Read a recorded JSON payload, e.g. a captured Helius response."""
    return json.loads((base_dir / name).read_text(encoding="utf-8"))


def load_fixture_text(base_dir: Path, name: str) -> str:
    return (base_dir / name).read_text(encoding="utf-8")


def validate_fixture(model: Type[T], payload: Any) -> T:
    # lists and unions go through a TypeAdapter as well as plain models
    return TypeAdapter(model).validate_python(payload)


__all__ = ["load_fixture", "load_fixture_text", "validate_fixture"]
