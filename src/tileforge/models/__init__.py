"""tileforge data models - pure Pydantic, no I/O."""

from tileforge.models.tileset import AnimationClip, Frame, TileImage, TileRect, Tileset

__all__ = [
    "AnimationClip",
    "Frame",
    "TileImage",
    "TileRect",
    "Tileset",
]
