"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses
import json
import pathlib


BACKDROP_COLOR = "#161616"
TEXT_COLOR = "#D0D0D0"

DEFAULT_FONT_FAMILY = "Microsoft YaHei UI, SimHei, Arial, sans-serif"
DEFAULT_MAIN_FONT_SIZE = 52
DEFAULT_TOP_TIME_FONT_SIZE = 46
DEFAULT_TOP_TIME_SPACING = 0
DEFAULT_ALIGNMENT = "center"
ALIGNMENTS = ("left", "center", "right")

TRANSACTION_ID_PREFIX = "4200002564"
TRANSACTION_RANDOM_LIMIT = 99999
TRANSACTION_RANDOM_DIGITS = 5

DEFAULT_IMAGE_NAME = "pay.png"
EXPORT_PREFIX = "modified_image_"

FIELD_ORDER = ("date", "payment_time", "transaction_id", "top_time")
STRING_LAYOUT_KEYS = (
	"date_text",
	"date_box",
	"payment_time_text",
	"payment_time_box",
	"transaction_id_box",
	"top_time_text",
	"top_time_box",
	"alignment",
	"font_family",
)


class OverlayError(RuntimeError):
	"""
	Recoverable error raised by the overlay pipeline.
	"""


@dataclasses.dataclass
class TextField:
	name: str
	text: str
	box_text: str
	font_family: str
	font_size: int
	alignment: str
	spacing: int = 0


@dataclasses.dataclass
class OverlayConfig:
	date_text: str = ""
	date_box: str = ""
	payment_time_text: str = ""
	payment_time_box: str = ""
	transaction_id_box: str = ""
	top_time_text: str = ""
	top_time_box: str = ""
	main_font_size: int = DEFAULT_MAIN_FONT_SIZE
	top_time_font_size: int = DEFAULT_TOP_TIME_FONT_SIZE
	top_time_spacing: int = DEFAULT_TOP_TIME_SPACING
	alignment: str = DEFAULT_ALIGNMENT
	font_family: str = DEFAULT_FONT_FAMILY


@dataclasses.dataclass
class RenderResult:
	width: int
	height: int
	rendered_fields: list[str]
	skipped_fields: list[str]
	transaction_id: str
	date_text: str


#============================================
def coerce_positive_int(value, default_value: int) -> int:
	"""
	Coerce a user value into a positive int, falling back when it is not one.

	Args:
		value: Raw value (int, str or None).
		default_value: Fallback value.

	Returns:
		Positive int.
	"""
	number = coerce_int(value, default_value)
	if number <= 0:
		return default_value
	return number


#============================================
def coerce_int(value, default_value: int) -> int:
	"""
	Coerce a user value into an int, falling back on blanks and junk.

	Args:
		value: Raw value (int, str or None).
		default_value: Fallback value.

	Returns:
		Parsed int.
	"""
	if value is None or isinstance(value, bool):
		return default_value
	if isinstance(value, int):
		return value
	text = str(value).strip()
	try:
		return int(text)
	except ValueError:
		return default_value


#============================================
def load_layout(path: pathlib.Path) -> OverlayConfig:
	"""
	Load an overlay layout from a JSON file.

	Args:
		path: JSON file path with keys matching OverlayConfig fields.

	Returns:
		OverlayConfig.
	"""
	try:
		payload = json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as error:
		raise OverlayError(f"Layout file {path} is not valid JSON: {error}") from error
	if not isinstance(payload, dict):
		raise OverlayError(f"Layout file {path} must contain a JSON object")

	known = {field.name for field in dataclasses.fields(OverlayConfig)}
	for key in payload:
		if key not in known:
			raise OverlayError(f"Unknown layout key: {key}")
		if key in STRING_LAYOUT_KEYS and not isinstance(payload[key], (str, type(None))):
			raise OverlayError(f"Layout key {key} must be a string")

	config = OverlayConfig(**payload)
	return normalize_config(config)


#============================================
def normalize_config(config: OverlayConfig) -> OverlayConfig:
	"""
	Apply numeric fallbacks to a config.

	Args:
		config: Raw config.

	Returns:
		Config with usable font sizes and spacing.
	"""
	return dataclasses.replace(
		config,
		main_font_size=coerce_positive_int(config.main_font_size, DEFAULT_MAIN_FONT_SIZE),
		top_time_font_size=coerce_positive_int(config.top_time_font_size, DEFAULT_TOP_TIME_FONT_SIZE),
		top_time_spacing=coerce_int(config.top_time_spacing, DEFAULT_TOP_TIME_SPACING),
		alignment=str(config.alignment or DEFAULT_ALIGNMENT).strip().lower(),
	)
