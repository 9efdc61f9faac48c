"""Shared fixtures for tileforge tests."""

from pathlib import Path

import pytest

from tileforge.loader import load_tileset
from tileforge.models import AnimationClip, Frame, TileImage, Tileset

DATA_DIR = Path(__file__).parent / "data"

SMALL_TSX = """<?xml version="1.0" encoding="UTF-8"?>
<tileset version="1.2" tiledversion="1.2.1" name="small" tilewidth="16" tileheight="16" tilecount="16" columns="4">
 <image source="small.png" width="64" height="64"/>
 <tile id="0">
  <animation>
   <frame tileid="0" duration="100"/>
   <frame tileid="1" duration="50"/>
   <frame tileid="2" duration="250"/>
  </animation>
 </tile>
 <tile id="5">
  <animation>
   <frame tileid="6" duration="200"/>
  </animation>
 </tile>
</tileset>
"""


@pytest.fixture(scope="session")
def overworld_path() -> Path:
    return DATA_DIR / "Overworld.tsx"


@pytest.fixture(scope="session")
def overworld(overworld_path: Path) -> Tileset:
    return load_tileset(overworld_path)


@pytest.fixture
def small_tileset() -> Tileset:
    return Tileset(
        name="small",
        tile_width=16,
        tile_height=16,
        columns=4,
        tile_count=16,
        image=TileImage(source="small.png", width=64, height=64),
        animations={
            0: AnimationClip(
                frames=(
                    Frame(tile_id=0, duration_ms=100),
                    Frame(tile_id=1, duration_ms=50),
                    Frame(tile_id=2, duration_ms=250),
                ),
            ),
            5: AnimationClip(frames=(Frame(tile_id=6, duration_ms=200),)),
        },
    )


@pytest.fixture
def small_tsx_text() -> str:
    return SMALL_TSX


@pytest.fixture
def small_tsx(tmp_path: Path) -> Path:
    path = tmp_path / "small.tsx"
    path.write_text(SMALL_TSX, encoding="utf-8")
    return path


@pytest.fixture
def small_tsj_data() -> dict[str, object]:
    return {
        "type": "tileset",
        "version": "1.2",
        "tiledversion": "1.2.1",
        "name": "small",
        "tilewidth": 16,
        "tileheight": 16,
        "tilecount": 16,
        "columns": 4,
        "image": "small.png",
        "imagewidth": 64,
        "imageheight": 64,
        "tiles": [
            {
                "id": 0,
                "animation": [
                    {"tileid": 0, "duration": 100},
                    {"tileid": 1, "duration": 50},
                    {"tileid": 2, "duration": 250},
                ],
            },
            {"id": 5, "animation": [{"tileid": 6, "duration": 200}]},
        ],
    }
