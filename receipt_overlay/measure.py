"""
Text width measurement backends.
"""

# PIP3 modules
import reportlab.pdfbase.cidfonts
import reportlab.pdfbase.pdfmetrics

# local repo modules
import receipt_overlay as rov
import receipt_overlay.config
import receipt_overlay.fonts


DEFAULT_PDF_FONT = "Helvetica"
DEFAULT_PDF_CJK_FONT = "STSong-Light"
LATIN1_LIMIT = 0xFF


class TextMeasurer:
	"""
	Measure the advance width of text for a font family and pixel size.
	"""

	def measure(self, text: str, font_family: str, font_size: int) -> float:
		raise NotImplementedError


class PillowTextMeasurer(TextMeasurer):
	"""
	Measure with the host fonts Pillow resolves, matching what the surface draws.
	"""

	def measure(self, text: str, font_family: str, font_size: int) -> float:
		if not text:
			return 0.0
		font = rov.fonts.resolve_font(font_family, font_size)
		return float(font.getlength(text))


class ReportLabTextMeasurer(TextMeasurer):
	"""
	Measure with ReportLab's built-in font metrics.

	Host fonts are ignored, so widths are identical on every machine.
	Latin-1 characters use the standard PDF font; anything wider falls
	back to a CID font that ships with ReportLab.
	"""

	def __init__(self, font_name: str = DEFAULT_PDF_FONT, cjk_font_name: str = DEFAULT_PDF_CJK_FONT):
		self.font_name = font_name
		self.cjk_font_name = cjk_font_name
		self._cjk_registered = False

	def _ensure_cjk_font(self) -> None:
		if self._cjk_registered:
			return
		if self.cjk_font_name not in reportlab.pdfbase.pdfmetrics.getRegisteredFontNames():
			font = reportlab.pdfbase.cidfonts.UnicodeCIDFont(self.cjk_font_name)
			reportlab.pdfbase.pdfmetrics.registerFont(font)
		self._cjk_registered = True

	def measure(self, text: str, font_family: str, font_size: int) -> float:
		total = 0.0
		for char in text:
			if ord(char) <= LATIN1_LIMIT:
				font_name = self.font_name
			else:
				self._ensure_cjk_font()
				font_name = self.cjk_font_name
			total += reportlab.pdfbase.pdfmetrics.stringWidth(char, font_name, font_size)
		return total


#============================================
def build_measurer(name: str) -> TextMeasurer:
	"""
	Build a measurer by backend name.

	Args:
		name: "pillow" or "reportlab".

	Returns:
		TextMeasurer instance.
	"""
	normalized = name.strip().lower()
	if normalized == "pillow":
		return PillowTextMeasurer()
	if normalized == "reportlab":
		return ReportLabTextMeasurer()
	raise rov.config.OverlayError(f"Unknown metrics backend: {name}")
