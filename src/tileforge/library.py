"""Shared store of loaded tilesets with whole-object hot reload."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from tileforge.loader import load_tileset
from tileforge.models.tileset import Tileset

logger = logging.getLogger(__name__)


class TilesetLibrary:
    """Loads tilesets on first use and hands out the same immutable object.

    Relative names are resolved against *base_dir*. A reload parses the file
    again and swaps the cached tileset in a single assignment; readers holding
    the old object keep a consistent view, and a failed reload leaves the
    previous tileset in place.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir or Path.cwd()
        self._tilesets: dict[Path, Tileset] = {}
        self._lock = threading.Lock()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, name: Path | str) -> Path:
        path = Path(name)
        if not path.is_absolute():
            path = self._base_dir / path
        return path.resolve()

    def get(self, name: Path | str) -> Tileset:
        """Return the cached tileset for *name*, loading it if needed."""
        path = self.path_for(name)
        tileset = self._tilesets.get(path)
        if tileset is not None:
            return tileset
        with self._lock:
            tileset = self._tilesets.get(path)
            if tileset is None:
                tileset = load_tileset(path)
                self._tilesets[path] = tileset
        return tileset

    def reload(self, name: Path | str) -> Tileset:
        """Re-read *name* from disk and replace the cached tileset.

        Raises
        ------
        TilesetLoadError
            If the new file is invalid. The cached tileset is left untouched.
        """
        path = self.path_for(name)
        tileset = load_tileset(path)
        with self._lock:
            self._tilesets[path] = tileset
        logger.info("Reloaded tileset '%s' from %s", tileset.name, path)
        return tileset

    def loaded(self) -> list[Path]:
        with self._lock:
            return sorted(self._tilesets)

    def clear(self) -> None:
        with self._lock:
            self._tilesets.clear()

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (str, Path)):
            return False
        return self.path_for(name) in self._tilesets
