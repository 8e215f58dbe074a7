"""
Render pass orchestration.
"""

# Standard Library
import datetime
import pathlib
import random

# PIP3 modules
import PIL.Image

# local repo modules
import receipt_overlay as rov
import receipt_overlay.config
import receipt_overlay.layout
import receipt_overlay.measure
import receipt_overlay.surface


OverlayConfig = rov.config.OverlayConfig
OverlayError = rov.config.OverlayError
RenderResult = rov.config.RenderResult
TextField = rov.config.TextField
Surface = rov.surface.Surface

TRANSACTION_ID_PREFIX = rov.config.TRANSACTION_ID_PREFIX
TRANSACTION_RANDOM_LIMIT = rov.config.TRANSACTION_RANDOM_LIMIT
TRANSACTION_RANDOM_DIGITS = rov.config.TRANSACTION_RANDOM_DIGITS


class TransactionIdGenerator:
	"""
	Build pseudo transaction ids: fixed prefix, YYYYMMDD, 5 random digits.
	"""

	def __init__(self, rng: random.Random | None = None, prefix: str = TRANSACTION_ID_PREFIX):
		self.rng = rng or random.Random()
		self.prefix = prefix

	def generate(self, for_date: datetime.date) -> str:
		suffix = self.rng.randrange(TRANSACTION_RANDOM_LIMIT)
		return f"{self.prefix}{format_compact_date(for_date)}{suffix:0{TRANSACTION_RANDOM_DIGITS}d}"


#============================================
def format_compact_date(value: datetime.date) -> str:
	return f"{value.year:04d}{value.month:02d}{value.day:02d}"


#============================================
def format_default_date(value: datetime.date) -> str:
	"""
	Format a date the way the receipt prints it, e.g. "2024年01月15日".

	Args:
		value: Date to format.

	Returns:
		Formatted date string.
	"""
	return f"{value.year}年{value.month:02d}月{value.day:02d}日"


#============================================
def build_fields(
	config: OverlayConfig,
	today: datetime.date,
	id_generator: TransactionIdGenerator,
) -> list[TextField]:
	"""
	Build the fixed-order field list for one render pass.

	Args:
		config: Current overlay inputs.
		today: Date used for the default date and the transaction id.
		id_generator: Transaction id source, called once per pass.

	Returns:
		Fields in draw order: date, payment time, transaction id, top time.
	"""
	date_text = config.date_text or format_default_date(today)
	transaction_id = id_generator.generate(today)
	family = config.font_family
	align = config.alignment
	return [
		TextField("date", date_text, config.date_box, family, config.main_font_size, align),
		TextField("payment_time", config.payment_time_text, config.payment_time_box, family, config.main_font_size, align),
		TextField("transaction_id", transaction_id, config.transaction_id_box, family, config.main_font_size, align),
		TextField(
			"top_time",
			config.top_time_text,
			config.top_time_box,
			family,
			config.top_time_font_size,
			align,
			config.top_time_spacing,
		),
	]


#============================================
def render_pass(
	surface: Surface,
	source: PIL.Image.Image | None,
	fields: list[TextField],
	measurer: rov.measure.TextMeasurer,
) -> RenderResult | None:
	"""
	Recompose the surface from the source image plus every field.

	Args:
		surface: Surface to repaint.
		source: Loaded source image, or None when nothing is loaded.
		fields: Fields in draw order; later fields paint over earlier ones.
		measurer: Width measurement backend.

	Returns:
		RenderResult, or None when no source image is loaded.
	"""
	if source is None:
		return None

	surface.reset(source)
	rendered: list[str] = []
	skipped: list[str] = []
	for field in fields:
		placement = rov.layout.render_field(surface, measurer, field)
		if placement is None:
			skipped.append(field.name)
		else:
			rendered.append(field.name)

	by_name = {field.name: field.text for field in fields}
	return RenderResult(
		width=surface.width,
		height=surface.height,
		rendered_fields=rendered,
		skipped_fields=skipped,
		transaction_id=by_name.get("transaction_id", ""),
		date_text=by_name.get("date", ""),
	)


class OverlaySession:
	"""
	Owns the surface and the loaded source image across render passes.
	"""

	def __init__(
		self,
		config: OverlayConfig | None = None,
		measurer: rov.measure.TextMeasurer | None = None,
		id_generator: TransactionIdGenerator | None = None,
		clock=None,
	):
		self.config = config or OverlayConfig()
		self.measurer = measurer or rov.measure.PillowTextMeasurer()
		self.id_generator = id_generator or TransactionIdGenerator()
		self.clock = clock or datetime.datetime.now
		self.surface = Surface()
		self.source: PIL.Image.Image | None = None
		self.last_result: RenderResult | None = None

	def load(self, path: pathlib.Path) -> RenderResult | None:
		"""
		Load a source image, wait for it, then render once.

		Args:
			path: Image path.

		Returns:
			RenderResult of the first pass.
		"""
		future = rov.surface.load_image_async(path)
		self.source = future.result()
		return self.render()

	def render(self) -> RenderResult | None:
		today = self.clock().date()
		fields = build_fields(self.config, today, self.id_generator)
		result = render_pass(self.surface, self.source, fields, self.measurer)
		if result is not None:
			# Keep the synthesized date so later passes reuse it.
			self.config.date_text = result.date_text
			self.last_result = result
		return result

	def describe_size(self) -> str:
		if self.last_result is None:
			return "No image loaded."
		return (
			f"Source size: {self.last_result.width}x{self.last_result.height} pixels. "
			"All coordinates use this size."
		)

	def export(self, output_dir: pathlib.Path) -> pathlib.Path:
		"""
		Render a fresh pass and write it as a timestamped PNG.

		Args:
			output_dir: Destination directory.

		Returns:
			Written file path.
		"""
		if self.source is None:
			raise OverlayError("Load an image first.")
		self.render()
		return rov.surface.export_png(self.surface, output_dir, self.clock())
