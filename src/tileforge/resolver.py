"""Resolve which tile to draw for an animated tile at a point in time.

Everything here is a pure function of an immutable :class:`Tileset` and an
elapsed time supplied by the caller. Nothing advances incrementally, so the
result for a given instant is the same for every caller and every visible
instance of a tile, and no locking is needed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tileforge.models.tileset import AnimationClip, Tileset


@dataclass(frozen=True)
class FrameSpan:
    """Where one frame sits inside a playback cycle."""

    index: int
    tile_id: int
    start_ms: int  # inclusive
    end_ms: int  # exclusive


def active_frame(clip: AnimationClip, elapsed_ms: float) -> int:
    """Return the position in ``clip.frames`` that is active at *elapsed_ms*.

    Negative times wrap with floored modulo, so ``-1`` is the last
    millisecond of the cycle.
    """
    t = elapsed_ms % clip.cycle_length
    running = 0
    for index, frame in enumerate(clip.frames):
        running += frame.duration_ms
        if running > t:
            return index
    # Unreachable for a validated clip since t < cycle_length.
    return len(clip.frames) - 1


def resolve(tileset: Tileset, base_tile_index: int, elapsed_ms: float) -> int:
    """Return the tile index to render for *base_tile_index* at *elapsed_ms*.

    Tiles without an animation clip are static and come back unchanged.

    Parameters
    ----------
    tileset:
        A validated tileset.
    base_tile_index:
        The tile placed in the map.
    elapsed_ms:
        Milliseconds since the shared animation epoch. May be negative.
    """
    clip = tileset.animations.get(base_tile_index)
    if clip is None:
        return base_tile_index
    return clip.frames[active_frame(clip, elapsed_ms)].tile_id


def resolve_all(tileset: Tileset, elapsed_ms: float) -> dict[int, int]:
    """Resolve every animated tile of *tileset* at one instant."""
    return {
        base: clip.frames[active_frame(clip, elapsed_ms)].tile_id
        for base, clip in tileset.animations.items()
    }


def frame_schedule(clip: AnimationClip) -> list[FrameSpan]:
    """Lay out the frames of one cycle on a timeline starting at zero."""
    spans: list[FrameSpan] = []
    start = 0
    for index, frame in enumerate(clip.frames):
        end = start + frame.duration_ms
        spans.append(FrameSpan(index=index, tile_id=frame.tile_id, start_ms=start, end_ms=end))
        start = end
    return spans


def next_change_ms(tileset: Tileset, base_tile_index: int, elapsed_ms: float) -> float | None:
    """Milliseconds from *elapsed_ms* until the drawn tile changes.

    Returns ``None`` when the drawn tile never changes: static tiles, and
    clips whose frames all show the same tile.
    """
    clip = tileset.animations.get(base_tile_index)
    if clip is None or len(set(clip.tile_ids)) == 1:
        return None
    t = elapsed_ms % clip.cycle_length
    spans = frame_schedule(clip)
    current = active_frame(clip, elapsed_ms)
    waited = spans[current].end_ms - t
    # Consecutive frames may repeat the same tile; skip past them.
    index = (current + 1) % len(spans)
    while spans[index].tile_id == spans[current].tile_id:
        waited += spans[index].end_ms - spans[index].start_ms
        index = (index + 1) % len(spans)
    return waited
