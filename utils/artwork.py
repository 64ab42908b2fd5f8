"""Card images for catalog entries.

Entries point at a web path such as ``/images/sentinel2.png``. When that file
is present under ``config.IMAGES_DIR`` it is used as is; otherwise an orbit
diagram is drawn once and cached in ``config.UI_ASSETS_DIR``.
"""

from __future__ import annotations

import logging
import zlib
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageDraw

import config
from catalog import CatalogEntry

logger = logging.getLogger(__name__)

# Ring radius in pixels per orbit family, smallest first.
ORBIT_RADII = {"LEO": 120, "SSO": 150, "POLAR": 150, "MEO": 200, "GEO": 250, "HEO": 230}
SIZE = (960, 540)


def local_image(entry: CatalogEntry, images_dir: Optional[Path] = None) -> Optional[Path]:
    """Local file behind ``entry.image``, or None when it is not shipped."""
    if not entry.image:
        return None
    images_dir = images_dir or config.IMAGES_DIR
    # "/images/x.png" lives at IMAGES_DIR / "x.png".
    rel = Path(entry.image.lstrip("/"))
    if rel.parts and rel.parts[0] == images_dir.name:
        rel = Path(*rel.parts[1:]) if len(rel.parts) > 1 else Path()
    candidate = images_dir / rel
    return candidate if candidate.is_file() else None


def _slug(name: str) -> str:
    return "".join(c if c.isalnum() else "_" for c in name.lower())


def render_orbit_card(entry: CatalogEntry, path: Path) -> Path:
    """Draw the entry's orbit families around a planet disc and save as PNG."""
    rng = np.random.default_rng(zlib.crc32(entry.name.encode("utf-8")))
    hue = tuple(int(v) for v in rng.integers(90, 230, size=3))

    img = Image.new("RGB", SIZE, (6, 12, 24))
    draw = ImageDraw.Draw(img)
    cx, cy = 300, SIZE[1] // 2

    radii = sorted({ORBIT_RADII.get(orbit, 180) for orbit in entry.orbit_types}) or [180]
    for radius in radii:
        draw.ellipse((cx - radius, cy - radius * 0.45, cx + radius, cy + radius * 0.45), outline=hue, width=2)
    draw.ellipse((cx - 70, cy - 70, cx + 70, cy + 70), fill=(32, 84, 140), outline=(120, 180, 230), width=2)

    # Spacecraft sits on the outermost ring at a name-dependent angle.
    angle = float(rng.uniform(0, 2 * np.pi))
    sx = cx + radii[-1] * np.cos(angle)
    sy = cy + radii[-1] * 0.45 * np.sin(angle)
    draw.rectangle((sx - 9, sy - 6, sx + 9, sy + 6), fill=(235, 238, 245))
    draw.line((sx - 26, sy, sx + 26, sy), fill=hue, width=5)

    lines = [entry.name, entry.category, " / ".join(entry.orbit_types) or "Orbit n/a"]
    if entry.norad_id:
        lines.append(f"NORAD {entry.norad_id}")
    for i, text in enumerate(lines):
        draw.text((620, 200 + i * 28), text, fill=(225, 232, 242) if i == 0 else (150, 165, 185))

    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path)
    logger.info("Rendered card image for %s at %s", entry.name, path)
    return path


def satellite_image(
    entry: CatalogEntry, images_dir: Optional[Path] = None, assets_dir: Optional[Path] = None
) -> Path:
    """Image to show on an entry's card: the shipped asset or a cached diagram."""
    shipped = local_image(entry, images_dir)
    if shipped is not None:
        return shipped
    assets_dir = assets_dir or config.UI_ASSETS_DIR
    path = assets_dir / f"{_slug(entry.name)}.png"
    if path.exists():
        return path
    return render_orbit_card(entry, path)
