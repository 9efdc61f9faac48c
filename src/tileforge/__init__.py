"""tileforge - Tiled tileset loading and tile animation resolution."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tileforge")
except PackageNotFoundError:
    __version__ = "unknown"
