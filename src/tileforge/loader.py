"""Read Tiled tileset definitions (.tsx XML or .tsj JSON) into a Tileset."""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any

import jsonschema
from pydantic import ValidationError as PydanticValidationError

from tileforge.models.tileset import Tileset
from tileforge.validation import validate_tileset_json

logger = logging.getLogger(__name__)

XML_SUFFIXES = frozenset({".tsx", ".xml"})
JSON_SUFFIXES = frozenset({".tsj", ".json"})


class TilesetLoadError(ValueError):
    """Raised when a tileset definition cannot be read or fails validation."""


def load_tileset(path: Path | str) -> Tileset:
    """Load and validate a tileset file.

    The format is picked from the file suffix: ``.tsx``/``.xml`` for the Tiled
    XML format, ``.tsj``/``.json`` for the Tiled JSON format.

    Raises
    ------
    TilesetLoadError
        If the file cannot be read, cannot be parsed, or describes an invalid
        tileset.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in XML_SUFFIXES | JSON_SUFFIXES:
        msg = f"unsupported tileset format '{path.suffix}': {path}"
        raise TilesetLoadError(msg)

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        msg = f"tileset file not found: {path}"
        raise TilesetLoadError(msg) from None
    except PermissionError:
        msg = f"permission denied reading tileset file: {path}"
        raise TilesetLoadError(msg) from None
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"cannot read tileset file {path}: {exc}"
        raise TilesetLoadError(msg) from None

    if suffix in XML_SUFFIXES:
        tileset = parse_tsx(text)
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"tileset file contains invalid JSON: {exc}"
            raise TilesetLoadError(msg) from None
        tileset = parse_tsj(data)

    logger.debug("Loaded tileset '%s' from %s", tileset.name, path)
    return tileset


def parse_tsx(text: str) -> Tileset:
    """Parse a Tiled XML tileset document.

    Only ``<tile>`` elements that carry an ``<animation>`` are kept; other
    per-tile metadata has no effect on playback.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        msg = f"tileset file contains invalid XML: {exc}"
        raise TilesetLoadError(msg) from None

    if root.tag != "tileset":
        msg = f"expected a <tileset> root element, found <{root.tag}>"
        raise TilesetLoadError(msg)

    image_elem = root.find("image")
    if image_elem is None:
        msg = "tileset has no <image> element"
        raise TilesetLoadError(msg)

    animations: dict[int, dict[str, Any]] = {}
    for tile_elem in root.findall("tile"):
        anim_elem = tile_elem.find("animation")
        if anim_elem is None:
            continue
        base = _int_attr(tile_elem, "id")
        if base in animations:
            msg = f"tile {base} has more than one animation"
            raise TilesetLoadError(msg)
        animations[base] = {
            "frames": [
                {"tile_id": frame.get("tileid"), "duration_ms": frame.get("duration")}
                for frame in anim_elem.findall("frame")
            ],
        }

    return _build(
        {
            "name": root.get("name", ""),
            "tile_width": root.get("tilewidth"),
            "tile_height": root.get("tileheight"),
            "columns": root.get("columns"),
            "tile_count": root.get("tilecount"),
            "image": {
                "source": image_elem.get("source"),
                "width": image_elem.get("width"),
                "height": image_elem.get("height"),
                "trans": image_elem.get("trans"),
            },
            "animations": animations,
            "version": root.get("version"),
            "tiled_version": root.get("tiledversion"),
        }
    )


def parse_tsj(data: object) -> Tileset:
    """Parse a decoded Tiled JSON tileset document."""
    if not isinstance(data, dict):
        msg = "tileset document must be a JSON object"
        raise TilesetLoadError(msg)
    try:
        validate_tileset_json(data)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        msg = f"tileset document does not match schema at {location}: {exc.message}"
        raise TilesetLoadError(msg) from None

    animations: dict[int, dict[str, Any]] = {}
    for tile in data.get("tiles", []):
        if "animation" not in tile:
            continue
        base = tile["id"]
        if base in animations:
            msg = f"tile {base} has more than one animation"
            raise TilesetLoadError(msg)
        animations[base] = {
            "frames": [
                {"tile_id": frame["tileid"], "duration_ms": frame["duration"]}
                for frame in tile["animation"]
            ],
        }

    version = data.get("version")
    trans = data.get("transparentcolor")
    return _build(
        {
            "name": data["name"],
            "tile_width": data["tilewidth"],
            "tile_height": data["tileheight"],
            "columns": data["columns"],
            "tile_count": data["tilecount"],
            "image": {
                "source": data["image"],
                "width": data["imagewidth"],
                "height": data["imageheight"],
                "trans": trans.lstrip("#") if trans else None,
            },
            "animations": animations,
            "version": str(version) if version is not None else None,
            "tiled_version": data.get("tiledversion"),
        }
    )


def _int_attr(elem: ET.Element, name: str) -> int:
    raw = elem.get(name)
    if raw is None:
        msg = f"<{elem.tag}> is missing the '{name}' attribute"
        raise TilesetLoadError(msg)
    try:
        return int(raw)
    except ValueError:
        msg = f"<{elem.tag}> attribute '{name}' is not an integer: {raw!r}"
        raise TilesetLoadError(msg) from None


def _build(data: dict[str, Any]) -> Tileset:
    try:
        tileset = Tileset.model_validate(data)
    except PydanticValidationError as exc:
        msg = f"tileset has invalid structure: {exc}"
        raise TilesetLoadError(msg) from None
    logger.debug(
        "Parsed tileset '%s' (%d tiles, %d animations)",
        tileset.name, tileset.tile_count, len(tileset.animations),
    )
    return tileset
