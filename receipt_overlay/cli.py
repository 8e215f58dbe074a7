"""
CLI entry points for receipt text overlays.
"""

# Standard Library
import argparse
import dataclasses
import pathlib
import random
import sys

# PIP3 modules
import PIL.Image

# local repo modules
import receipt_overlay as rov
import receipt_overlay.compose
import receipt_overlay.config
import receipt_overlay.measure


OverlayConfig = rov.config.OverlayConfig
OverlayError = rov.config.OverlayError

DEFAULT_IMAGE_NAME = rov.config.DEFAULT_IMAGE_NAME

# argparse dest -> OverlayConfig field
OVERRIDE_FIELDS = (
	"date_text",
	"date_box",
	"payment_time_text",
	"payment_time_box",
	"transaction_id_box",
	"top_time_text",
	"top_time_box",
	"main_font_size",
	"top_time_font_size",
	"top_time_spacing",
	"alignment",
	"font_family",
)


#============================================
def build_config(args: argparse.Namespace) -> OverlayConfig:
	"""
	Build the overlay config from an optional layout file and CLI flags.

	Args:
		args: Parsed argparse namespace.

	Returns:
		OverlayConfig.
	"""
	if args.layout_path:
		config = rov.config.load_layout(pathlib.Path(args.layout_path))
	else:
		config = OverlayConfig()
	overrides = {}
	for name in OVERRIDE_FIELDS:
		value = getattr(args, name, None)
		if value is not None:
			overrides[name] = value
	config = dataclasses.replace(config, **overrides)
	return rov.config.normalize_config(config)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Mask boxes on a receipt image and overlay new text.")

	io_group = parser.add_argument_group("Input and output")
	io_group.add_argument("-i", "--image", dest="image_path", default=DEFAULT_IMAGE_NAME, help="Source image path.")
	io_group.add_argument("-o", "--output-dir", dest="output_dir", default=".", help="Directory for the exported PNG.")
	io_group.add_argument("-l", "--layout", dest="layout_path", default=None, help="Layout JSON file.")
	io_group.add_argument("-n", "--dry-run", dest="dry_run", action="store_true", help="Render without writing a PNG.")

	field_group = parser.add_argument_group("Fields")
	field_group.add_argument("--date-text", dest="date_text", default=None, help="Date text; defaults to today.")
	field_group.add_argument("--date-box", dest="date_box", default=None, help="Date box as x1,y1,x2,y2.")
	field_group.add_argument("--payment-time-text", dest="payment_time_text", default=None, help="Payment time text.")
	field_group.add_argument("--payment-time-box", dest="payment_time_box", default=None, help="Payment time box.")
	field_group.add_argument("--transaction-id-box", dest="transaction_id_box", default=None, help="Transaction id box.")
	field_group.add_argument("--top-time-text", dest="top_time_text", default=None, help="Status bar time text.")
	field_group.add_argument("--top-time-box", dest="top_time_box", default=None, help="Status bar time box.")

	style_group = parser.add_argument_group("Style")
	style_group.add_argument("--main-font-size", dest="main_font_size", default=None, help="Main font size in pixels.")
	style_group.add_argument("--top-time-font-size", dest="top_time_font_size", default=None, help="Status bar font size in pixels.")
	style_group.add_argument("--top-time-spacing", dest="top_time_spacing", default=None, help="Status bar character spacing.")
	style_group.add_argument(
		"-a",
		"--alignment",
		dest="alignment",
		choices=rov.config.ALIGNMENTS,
		default=None,
		help="Horizontal alignment inside each box.",
	)
	style_group.add_argument("--font-family", dest="font_family", default=None, help="Comma separated font families.")
	style_group.add_argument(
		"-m",
		"--metrics",
		dest="metrics",
		choices=("pillow", "reportlab"),
		default="pillow",
		help="Text width measurement backend.",
	)
	style_group.add_argument("--seed", dest="seed", type=int, default=None, help="Seed for transaction ids.")

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> int:
	"""
	Load the image, render one pass, and export it.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit code.
	"""
	try:
		config = build_config(args)
	except (OSError, OverlayError) as error:
		print(f"Layout error: {error}")
		return 2

	session = rov.compose.OverlaySession(
		config=config,
		measurer=rov.measure.build_measurer(args.metrics),
		id_generator=rov.compose.TransactionIdGenerator(random.Random(args.seed)),
	)

	image_path = pathlib.Path(args.image_path)
	is_default = args.image_path == DEFAULT_IMAGE_NAME
	try:
		result = session.load(image_path)
	except (OSError, PIL.UnidentifiedImageError):
		if is_default:
			print(f"Default image '{DEFAULT_IMAGE_NAME}' not found, load an image manually.")
		else:
			print(f"Could not load image: {image_path}")
		return 1

	label = "Default image loaded" if is_default else "Image loaded"
	print(f"{label}: {result.width}x{result.height}")
	print(session.describe_size())
	for name in result.rendered_fields:
		print(f"Rendered field: {name}")
	if args.dry_run:
		print(f"Transaction id: {result.transaction_id}")
		print("Dry run, nothing written.")
		return 0
	try:
		output_path = session.export(pathlib.Path(args.output_dir))
	except OSError as error:
		print(f"Could not write image: {error}")
		return 1
	# export re-renders, so report the id of the pass that was written
	print(f"Transaction id: {session.last_result.transaction_id}")
	print(f"Image written: {output_path}")
	return 0


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	sys.exit(run_pipeline(args))
