"""Tileset definition models."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


class Frame(BaseModel):
    """One step of an animation: a tile index shown for a fixed time."""

    model_config = ConfigDict(frozen=True)

    tile_id: int = Field(ge=0)
    duration_ms: int = Field(gt=0)


class AnimationClip(BaseModel):
    """Ordered cycle of alternate tiles played in place of one base tile."""

    model_config = ConfigDict(frozen=True)

    frames: tuple[Frame, ...] = Field(min_length=1)

    @property
    def cycle_length(self) -> int:
        """Total duration of one playback cycle in milliseconds."""
        return sum(frame.duration_ms for frame in self.frames)

    @property
    def tile_ids(self) -> tuple[int, ...]:
        return tuple(frame.tile_id for frame in self.frames)


class TileImage(BaseModel):
    """Sprite sheet reference with its declared pixel size."""

    model_config = ConfigDict(frozen=True)

    source: str = Field(min_length=1)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    trans: str | None = None  # transparent colour, hex without '#'


class TileRect(BaseModel):
    """Pixel rectangle of a tile inside the sprite sheet."""

    model_config = ConfigDict(frozen=True)

    x: int
    y: int
    width: int
    height: int


class Tileset(BaseModel):
    """A sprite sheet cut into a uniform grid of tiles, plus tile animations.

    Tiles are addressed by a zero-based index in row-major order. Animations
    are keyed by the base tile index they replace, so a tile has at most one
    clip. Instances are immutable; reloading produces a new object.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    tile_width: int = Field(gt=0)
    tile_height: int = Field(gt=0)
    columns: int = Field(gt=0)
    tile_count: int = Field(gt=0)
    image: TileImage
    animations: Mapping[int, AnimationClip] = Field(default_factory=dict, validate_default=True)
    version: str | None = None
    tiled_version: str | None = None

    @field_validator("animations")
    @classmethod
    def _freeze_animations(cls, value: Mapping[int, AnimationClip]) -> Mapping[int, AnimationClip]:
        return MappingProxyType(dict(value))

    @field_serializer("animations")
    def _dump_animations(self, value: Mapping[int, AnimationClip]) -> dict[int, AnimationClip]:
        return dict(value)

    @model_validator(mode="after")
    def _check_layout(self) -> Tileset:
        if self.tile_count % self.columns:
            msg = f"tile count {self.tile_count} is not a multiple of {self.columns} columns"
            raise ValueError(msg)
        if self.image.width != self.columns * self.tile_width:
            msg = (
                f"image width {self.image.width} does not match "
                f"{self.columns} columns of {self.tile_width}px"
            )
            raise ValueError(msg)
        if self.image.height != self.rows * self.tile_height:
            msg = (
                f"image height {self.image.height} does not match "
                f"{self.rows} rows of {self.tile_height}px"
            )
            raise ValueError(msg)
        for base, clip in self.animations.items():
            if not 0 <= base < self.tile_count:
                msg = f"animated tile {base} is outside 0..{self.tile_count - 1}"
                raise ValueError(msg)
            for frame in clip.frames:
                if frame.tile_id >= self.tile_count:
                    msg = (
                        f"animation for tile {base} references tile {frame.tile_id}, "
                        f"outside 0..{self.tile_count - 1}"
                    )
                    raise ValueError(msg)
        return self

    def __hash__(self) -> int:
        return hash(
            (
                self.name,
                self.tile_width,
                self.tile_height,
                self.columns,
                self.tile_count,
                self.image,
                tuple(sorted(self.animations.items())),
                self.version,
                self.tiled_version,
            )
        )

    @property
    def rows(self) -> int:
        return self.tile_count // self.columns

    def is_animated(self, tile_id: int) -> bool:
        return tile_id in self.animations

    def clip_for(self, tile_id: int) -> AnimationClip | None:
        """Return the animation clip for *tile_id*, or ``None`` for static tiles."""
        return self.animations.get(tile_id)

    def tile_rect(self, tile_id: int) -> TileRect:
        """Return the pixel rectangle of *tile_id* within the sprite sheet.

        Raises
        ------
        IndexError
            If *tile_id* is not a valid index into this tileset.
        """
        if not 0 <= tile_id < self.tile_count:
            msg = f"tile {tile_id} is outside 0..{self.tile_count - 1}"
            raise IndexError(msg)
        row, col = divmod(tile_id, self.columns)
        return TileRect(
            x=col * self.tile_width,
            y=row * self.tile_height,
            width=self.tile_width,
            height=self.tile_height,
        )
