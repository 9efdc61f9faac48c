"""Check a tileset's sprite sheet against its declared geometry with Pillow."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, UnidentifiedImageError

if TYPE_CHECKING:
    from tileforge.models.tileset import Tileset

logger = logging.getLogger(__name__)


@dataclass
class SheetCheck:
    """A single sprite sheet check result."""

    label: str
    passed: bool
    message: str = ""


@dataclass
class SheetReport:
    """All checks run against one sprite sheet."""

    path: Path
    checks: list[SheetCheck] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return all(c.passed for c in self.checks)


def sheet_path(tileset: Tileset, base_dir: Path) -> Path:
    """Resolve the sprite sheet path relative to the definition's directory."""
    return base_dir / tileset.image.source


def verify_sheet(tileset: Tileset, base_dir: Path) -> SheetReport:
    """Confirm the sprite sheet exists and matches the declared pixel size.

    Only the image header is read; pixel data is never decoded.
    """
    path = sheet_path(tileset, base_dir)
    report = SheetReport(path=path)

    if not path.is_file():
        report.checks.append(
            SheetCheck(
                label=f"Sprite sheet found ({tileset.image.source})",
                passed=False,
                message=f"No such file: {path}",
            )
        )
        return report
    report.checks.append(SheetCheck(label=f"Sprite sheet found ({tileset.image.source})", passed=True))

    try:
        with Image.open(path) as img:
            actual = img.size
    except (UnidentifiedImageError, OSError) as exc:
        report.checks.append(
            SheetCheck(label="Sprite sheet readable", passed=False, message=str(exc))
        )
        return report
    report.checks.append(SheetCheck(label="Sprite sheet readable", passed=True))

    declared = (tileset.image.width, tileset.image.height)
    report.checks.append(
        SheetCheck(
            label=f"Image size {declared[0]}x{declared[1]}",
            passed=actual == declared,
            message="" if actual == declared else f"Actual size is {actual[0]}x{actual[1]}",
        )
    )
    logger.debug("Verified sprite sheet %s: %s", path, "ok" if report.valid else "failed")
    return report
