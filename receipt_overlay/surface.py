"""
Raster surface, image loading and PNG export.
"""

# Standard Library
import concurrent.futures
import datetime
import io
import pathlib

# PIP3 modules
import PIL.Image
import PIL.ImageDraw

# local repo modules
import receipt_overlay as rov
import receipt_overlay.config
import receipt_overlay.fonts


EXPORT_PREFIX = rov.config.EXPORT_PREFIX

_LOADER = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="image-load")


class Surface:
	"""
	Mutable RGBA canvas that the layout engine paints onto.
	"""

	def __init__(self, width: int = 1, height: int = 1):
		self.image = PIL.Image.new("RGBA", (max(1, width), max(1, height)), (0, 0, 0, 0))
		self.draw = PIL.ImageDraw.Draw(self.image)

	@property
	def width(self) -> int:
		return self.image.width

	@property
	def height(self) -> int:
		return self.image.height

	#============================================
	def reset(self, source: PIL.Image.Image) -> None:
		"""
		Discard all content and repaint the source image at the origin.

		Args:
			source: Loaded source image; its size becomes the surface size.
		"""
		self.image = PIL.Image.new("RGBA", source.size, (0, 0, 0, 0))
		self.image.paste(source.convert("RGBA"), (0, 0))
		self.draw = PIL.ImageDraw.Draw(self.image)

	#============================================
	def fill_rect(self, x: int, y: int, width: int, height: int, color: str) -> None:
		"""
		Fill a width x height rectangle whose top-left corner is (x, y).

		Negative sizes fill the mirrored rectangle and zero sizes fill nothing.

		Args:
			x: Left edge.
			y: Top edge.
			width: Rectangle width.
			height: Rectangle height.
			color: Pillow color string, e.g. "#161616".
		"""
		if width == 0 or height == 0:
			return
		left = min(x, x + width)
		top = min(y, y + height)
		right = max(x, x + width)
		bottom = max(y, y + height)
		# Pillow rectangles include the far edge.
		self.draw.rectangle((left, top, right - 1, bottom - 1), fill=color)

	#============================================
	def draw_text(self, x: float, y: float, text: str, font_family: str, font_size: int, color: str) -> None:
		"""
		Draw text with its left edge at x and its vertical middle at y.

		Args:
			x: Left edge of the text.
			y: Vertical middle of the text.
			text: Text to draw.
			font_family: Comma separated family list.
			font_size: Font size in pixels.
			color: Pillow color string.
		"""
		if not text:
			return
		font = rov.fonts.resolve_font(font_family, font_size)
		self.draw.text((x, y), text, font=font, fill=color, anchor="lm")

	#============================================
	def to_png_bytes(self) -> bytes:
		"""
		Encode the current surface as PNG.

		Returns:
			PNG bytes.
		"""
		buffer = io.BytesIO()
		self.image.save(buffer, format="PNG")
		return buffer.getvalue()


#============================================
def load_image(path: pathlib.Path) -> PIL.Image.Image:
	"""
	Load and fully decode an image file.

	Args:
		path: Image path.

	Returns:
		Decoded PIL image.
	"""
	with PIL.Image.open(path) as image:
		image.load()
		return image.copy()


#============================================
def load_image_async(path: pathlib.Path) -> concurrent.futures.Future:
	"""
	Start loading an image in the background.

	Args:
		path: Image path.

	Returns:
		Future resolving to the decoded image, or raising the load error.
	"""
	return _LOADER.submit(load_image, pathlib.Path(path))


#============================================
def build_export_name(now: datetime.datetime) -> str:
	"""
	Build the export filename from a timestamp.

	Args:
		now: Export time.

	Returns:
		Filename like "modified_image_1705305600000.png".
	"""
	millis = int(now.timestamp() * 1000)
	return f"{EXPORT_PREFIX}{millis}.png"


#============================================
def export_png(surface: Surface, output_dir: pathlib.Path, now: datetime.datetime) -> pathlib.Path:
	"""
	Write the surface to a timestamped PNG file.

	Args:
		surface: Rendered surface.
		output_dir: Destination directory.
		now: Export time used for the filename.

	Returns:
		Written file path.
	"""
	output_dir = pathlib.Path(output_dir)
	output_dir.mkdir(parents=True, exist_ok=True)
	output_path = output_dir / build_export_name(now)
	output_path.write_bytes(surface.to_png_bytes())
	return output_path
