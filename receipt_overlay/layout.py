"""
Box-constrained text layout and rendering.
"""

# Standard Library
import dataclasses

# local repo modules
import receipt_overlay as rov
import receipt_overlay.box
import receipt_overlay.config
import receipt_overlay.measure


Box = rov.box.Box
TextField = rov.config.TextField
TextMeasurer = rov.measure.TextMeasurer

BACKDROP_COLOR = rov.config.BACKDROP_COLOR
TEXT_COLOR = rov.config.TEXT_COLOR


@dataclasses.dataclass
class TextPlacement:
	origin_x: float
	origin_y: float
	total_width: float
	glyphs: list[tuple[float, float, str]]


#============================================
def compute_align_origin(box: Box, text_width: float, align: str) -> float:
	"""
	Compute the left edge of text inside a box.

	Args:
		box: Target box.
		text_width: Measured text width.
		align: "left", "right" or "center"; anything else centers.

	Returns:
		X coordinate of the text's left edge.
	"""
	normalized = (align or "").strip().lower()
	if normalized == "left":
		return float(box.x1)
	if normalized == "right":
		return box.x2 - text_width
	return box.x1 + (box.width - text_width) / 2.0


#============================================
def compute_spaced_width(char_widths: list[float], spacing: float) -> float:
	"""
	Compute the width of individually placed characters.

	Args:
		char_widths: Width of each character.
		spacing: Gap added between neighboring characters.

	Returns:
		Sum of widths plus one gap per neighbor pair.
	"""
	if not char_widths:
		return 0.0
	return sum(char_widths) + spacing * (len(char_widths) - 1)


#============================================
def draw_text_in_box(
	surface,
	measurer: TextMeasurer,
	text: str,
	box: Box,
	font_family: str,
	font_size: int,
	alignment: str,
	spacing: int = 0,
) -> TextPlacement:
	"""
	Mask a box and draw text inside it.

	The whole box is filled with the backdrop color first, so stale pixels
	are hidden even when the text is empty. Text is vertically centered and
	horizontally placed by alignment. Text wider than the box overflows.

	Args:
		surface: Surface to paint on.
		measurer: Width measurement backend.
		text: Text to draw.
		box: Target box in source-image pixels.
		font_family: Comma separated family list.
		font_size: Font size in pixels.
		alignment: Horizontal alignment.
		spacing: Fixed gap between characters; 0 draws the text as one run.

	Returns:
		TextPlacement describing every draw call.
	"""
	text = text or ""
	surface.fill_rect(box.x1, box.y1, box.width, box.height, BACKDROP_COLOR)

	draw_y = box.center_y
	glyphs: list[tuple[float, float, str]] = []

	if spacing == 0:
		total_width = measurer.measure(text, font_family, font_size)
		draw_x = compute_align_origin(box, total_width, alignment)
		surface.draw_text(draw_x, draw_y, text, font_family, font_size, TEXT_COLOR)
		glyphs.append((draw_x, draw_y, text))
		return TextPlacement(draw_x, draw_y, total_width, glyphs)

	char_widths = [measurer.measure(char, font_family, font_size) for char in text]
	total_width = compute_spaced_width(char_widths, spacing)
	origin_x = compute_align_origin(box, total_width, alignment)

	current_x = origin_x
	for char, char_width in zip(text, char_widths):
		surface.draw_text(current_x, draw_y, char, font_family, font_size, TEXT_COLOR)
		glyphs.append((current_x, draw_y, char))
		current_x += char_width + spacing
	return TextPlacement(origin_x, draw_y, total_width, glyphs)


#============================================
def render_field(surface, measurer: TextMeasurer, field: TextField) -> TextPlacement | None:
	"""
	Parse a field's box and render it.

	Args:
		surface: Surface to paint on.
		measurer: Width measurement backend.
		field: Field to render.

	Returns:
		TextPlacement, or None when the box descriptor is malformed.
	"""
	box = rov.box.parse_box(field.box_text)
	if box is None:
		print(f"Skipping field {field.name}: malformed box '{field.box_text}'")
		return None
	return draw_text_in_box(
		surface,
		measurer,
		field.text,
		box,
		field.font_family,
		field.font_size,
		field.alignment,
		field.spacing,
	)
