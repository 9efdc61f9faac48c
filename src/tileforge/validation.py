"""Validation utilities for JSON tileset documents."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "tileset.schema.json"


@lru_cache(maxsize=1)
def _schema() -> dict[str, object]:
    return json.loads(_SCHEMA_PATH.read_text(encoding="utf-8"))


def validate_tileset_json(data: dict[str, object]) -> None:
    """Validate a Tiled JSON tileset dict against tileset.schema.json.

    Parameters
    ----------
    data:
        The decoded tileset document.

    Raises
    ------
    jsonschema.ValidationError
        If the data does not conform to the schema.
    """
    jsonschema.validate(data, _schema())
