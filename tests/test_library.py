"""Tests for the shared tileset library and hot reload."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tileforge.library import TilesetLibrary
from tileforge.loader import TilesetLoadError

if TYPE_CHECKING:
    from pathlib import Path


def test_get_caches_same_object(small_tsx: Path) -> None:
    library = TilesetLibrary(small_tsx.parent)
    first = library.get("small.tsx")
    assert library.get(small_tsx) is first
    assert "small.tsx" in library
    assert library.loaded() == [small_tsx.resolve()]


def test_get_propagates_load_error(tmp_path: Path) -> None:
    library = TilesetLibrary(tmp_path)
    with pytest.raises(TilesetLoadError, match="not found"):
        library.get("missing.tsx")
    assert library.loaded() == []


def test_reload_swaps_whole_tileset(small_tsx: Path) -> None:
    library = TilesetLibrary(small_tsx.parent)
    old = library.get("small.tsx")

    small_tsx.write_text(
        small_tsx.read_text(encoding="utf-8").replace('duration="250"', 'duration="50"'),
        encoding="utf-8",
    )
    new = library.reload("small.tsx")

    assert new is not old
    assert library.get("small.tsx") is new
    assert new.animations[0].cycle_length == 200
    # Callers still holding the old object see the old data.
    assert old.animations[0].cycle_length == 400


def test_failed_reload_keeps_previous(small_tsx: Path) -> None:
    library = TilesetLibrary(small_tsx.parent)
    old = library.get("small.tsx")

    small_tsx.write_text("<tileset", encoding="utf-8")
    with pytest.raises(TilesetLoadError):
        library.reload("small.tsx")

    assert library.get("small.tsx") is old


def test_clear(small_tsx: Path) -> None:
    library = TilesetLibrary(small_tsx.parent)
    library.get("small.tsx")
    library.clear()
    assert library.loaded() == []
    assert "small.tsx" not in library


def test_shared_tileset_cannot_be_altered(small_tsx: Path) -> None:
    from tileforge.models import AnimationClip, Frame
    from tileforge.resolver import resolve

    library = TilesetLibrary(small_tsx.parent)
    tileset = library.get("small.tsx")
    with pytest.raises(TypeError):
        tileset.animations[3] = AnimationClip(frames=(Frame(tile_id=9999, duration_ms=10),))  # type: ignore[index]
    assert resolve(library.get("small.tsx"), 3, 0) == 3
