from PIL import Image

from catalog import CatalogEntry
from utils import artwork


def _entry(**overrides):
    fields = dict(
        name="Sentinel-2",
        category="Earth Observation",
        image="/images/sentinel2.png",
        orbit_types=["LEO", "SSO"],
        norad_id=40697,
    )
    fields.update(overrides)
    return CatalogEntry(**fields)


def test_shipped_image_is_used(tmp_path):
    images = tmp_path / "images"
    images.mkdir()
    shipped = images / "sentinel2.png"
    Image.new("RGB", (4, 4)).save(shipped)

    path = artwork.satellite_image(_entry(), images_dir=images, assets_dir=tmp_path / "assets")

    assert path == shipped
    assert not (tmp_path / "assets").exists()


def test_missing_image_renders_cached_card(tmp_path):
    assets = tmp_path / "assets"

    path = artwork.satellite_image(_entry(), images_dir=tmp_path / "images", assets_dir=assets)

    assert path == assets / "sentinel_2.png"
    with Image.open(path) as img:
        assert img.size == artwork.SIZE
    mtime = path.stat().st_mtime_ns
    assert artwork.satellite_image(_entry(), images_dir=tmp_path / "images", assets_dir=assets) == path
    assert path.stat().st_mtime_ns == mtime


def test_entry_without_image_or_orbits_still_renders(tmp_path):
    entry = _entry(image="", orbit_types=[], norad_id=None)
    assert artwork.local_image(entry, tmp_path) is None
    assert artwork.satellite_image(entry, images_dir=tmp_path, assets_dir=tmp_path / "assets").is_file()
