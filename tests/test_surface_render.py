import datetime
import pathlib

import PIL.Image
import PIL.ImageColor
import pytest

import receipt_overlay.config
import receipt_overlay.fonts
import receipt_overlay.surface


Surface = receipt_overlay.surface.Surface
BACKDROP_RGBA = PIL.ImageColor.getrgb(receipt_overlay.config.BACKDROP_COLOR) + (255,)
SOURCE_RGB = (240, 240, 240)


#============================================
def make_source(width: int = 800, height: int = 600) -> PIL.Image.Image:
	return PIL.Image.new("RGB", (width, height), SOURCE_RGB)


#============================================
def test_reset_matches_source_size() -> None:
	"""
	Reset resizes the surface to the source and repaints it at the origin.
	"""
	surface = Surface()
	surface.reset(make_source(800, 600))
	assert (surface.width, surface.height) == (800, 600)
	assert surface.image.getpixel((0, 0)) == SOURCE_RGB + (255,)
	assert surface.image.getpixel((799, 599)) == SOURCE_RGB + (255,)

	surface.fill_rect(0, 0, 10, 10, "#000000")
	surface.reset(make_source(40, 30))
	assert (surface.width, surface.height) == (40, 30)
	assert surface.image.getpixel((0, 0)) == SOURCE_RGB + (255,)


#============================================
def test_fill_rect_covers_exact_region() -> None:
	"""
	A 300x60 fill at (100, 100) covers x 100-399 and y 100-159.
	"""
	surface = Surface()
	surface.reset(make_source())
	surface.fill_rect(100, 100, 300, 60, receipt_overlay.config.BACKDROP_COLOR)

	region = surface.image.crop((100, 100, 400, 160))
	assert region.getcolors() == [(300 * 60, BACKDROP_RGBA)]
	assert surface.image.getpixel((99, 100)) == SOURCE_RGB + (255,)
	assert surface.image.getpixel((400, 100)) == SOURCE_RGB + (255,)
	assert surface.image.getpixel((100, 160)) == SOURCE_RGB + (255,)


#============================================
def test_fill_rect_degenerate_sizes() -> None:
	"""
	Zero sizes fill nothing and negative sizes fill the mirrored rectangle.
	"""
	surface = Surface()
	surface.reset(make_source(50, 50))
	surface.fill_rect(10, 10, 0, 20, "#000000")
	surface.fill_rect(10, 10, 20, 0, "#000000")
	assert surface.image.getcolors() == [(50 * 50, SOURCE_RGB + (255,))]

	surface.fill_rect(30, 30, -10, -10, "#000000")
	region = surface.image.crop((20, 20, 30, 30))
	assert region.getcolors() == [(100, (0, 0, 0, 255))]
	assert surface.image.getpixel((30, 30)) == SOURCE_RGB + (255,)


#============================================
def test_draw_text_paints_inside_region() -> None:
	"""
	Text drawn with the fallback font changes pixels near its anchor.
	"""
	receipt_overlay.fonts.clear_font_cache()
	surface = Surface()
	surface.reset(make_source(200, 60))
	surface.draw_text(10, 30, "12:30", "NoSuchFamily", 24, "#000000")
	region = surface.image.crop((10, 10, 150, 50))
	colors = {color for _count, color in region.getcolors(maxcolors=100000)}
	assert colors != {SOURCE_RGB + (255,)}
	assert surface.image.crop((160, 0, 200, 60)).getcolors() == [(40 * 60, SOURCE_RGB + (255,))]


#============================================
def test_resolve_font_caches_fallback() -> None:
	"""
	Unknown families fall back to a default font that is cached per size.
	"""
	receipt_overlay.fonts.clear_font_cache()
	first = receipt_overlay.fonts.resolve_font("NoSuchFamily, AlsoMissing", 18)
	second = receipt_overlay.fonts.resolve_font("NoSuchFamily, AlsoMissing", 18)
	assert first is second
	assert first.getlength("WW") > first.getlength("W") > 0


#============================================
def test_split_family_list() -> None:
	"""
	Family lists drop quotes, blanks and whitespace.
	"""
	names = receipt_overlay.fonts.split_family_list("'Microsoft YaHei UI', SimHei,, \"Arial\" , sans-serif")
	assert names == ["Microsoft YaHei UI", "SimHei", "Arial", "sans-serif"]


#============================================
def test_load_image_async(tmp_path: pathlib.Path) -> None:
	"""
	The loader future resolves to the decoded image or raises the load error.
	"""
	path = tmp_path / "pay.png"
	make_source(64, 32).save(path)
	image = receipt_overlay.surface.load_image_async(path).result(timeout=10)
	assert image.size == (64, 32)

	missing = receipt_overlay.surface.load_image_async(tmp_path / "missing.png")
	with pytest.raises(OSError):
		missing.result(timeout=10)


#============================================
def test_export_png_names_and_contents(tmp_path: pathlib.Path) -> None:
	"""
	Export writes a PNG named after the timestamp in milliseconds.
	"""
	surface = Surface()
	surface.reset(make_source(120, 80))
	now = datetime.datetime(2024, 1, 15, 12, 30, 45, 123000)
	path = receipt_overlay.surface.export_png(surface, tmp_path / "out", now)

	assert path.name == f"modified_image_{int(now.timestamp() * 1000)}.png"
	with PIL.Image.open(path) as exported:
		assert exported.format == "PNG"
		assert exported.size == (120, 80)


#============================================
def test_fill_rect_rejects_malformed_color() -> None:
	"""
	Colors go straight to Pillow, so a bad color string raises.
	"""
	surface = Surface()
	surface.reset(make_source(20, 20))
	with pytest.raises(ValueError):
		surface.fill_rect(0, 0, 5, 5, "#12")
	assert surface.image.getpixel((0, 0)) == SOURCE_RGB + (255,)
