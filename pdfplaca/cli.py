"""
CLI entry points for placard rendering.
"""

# Standard Library
import argparse
import math
import pathlib
import time

# PIP3 modules
import fontTools.ttLib
import reportlab.lib.colors
import reportlab.pdfbase.ttfonts

# local repo modules
import pdfplaca as plc
import pdfplaca.config
import pdfplaca.metrics
import pdfplaca.page_sizes
import pdfplaca.render


PlacardConfig = plc.config.PlacardConfig

VERSION = plc.config.VERSION
DEFAULT_TEXT = plc.config.DEFAULT_TEXT
DEFAULT_OUTPUT = plc.config.DEFAULT_OUTPUT
DEFAULT_PAGE_SIZE = plc.config.DEFAULT_PAGE_SIZE
DEFAULT_ORIENTATION = plc.config.DEFAULT_ORIENTATION
DEFAULT_FONT = plc.config.DEFAULT_FONT
DEFAULT_MARGIN_MM = plc.config.DEFAULT_MARGIN_MM
DEFAULT_TEXT_COLOR = plc.config.DEFAULT_TEXT_COLOR
DEFAULT_BACK_COLOR = plc.config.DEFAULT_BACK_COLOR
DEFAULT_THRESHOLD = plc.config.DEFAULT_THRESHOLD
DEFAULT_Y_ADJUST_MM = plc.config.DEFAULT_Y_ADJUST_MM
UNLIMITED_LETTERS = plc.config.UNLIMITED_LETTERS


#============================================
def _parse_float(value: str) -> float:
	try:
		number = float(value)
	except ValueError as error:
		raise argparse.ArgumentTypeError(f"not a number: {value}") from error
	if not math.isfinite(number):
		raise argparse.ArgumentTypeError(f"not a finite number: {value}")
	return number


#============================================
def finite_float(value: str) -> float:
	return _parse_float(value)


#============================================
def positive_float(value: str) -> float:
	number = _parse_float(value)
	if number <= 0:
		raise argparse.ArgumentTypeError(f"must be greater than 0: {value}")
	return number


#============================================
def threshold_float(value: str) -> float:
	number = _parse_float(value)
	if number < 1.0:
		raise argparse.ArgumentTypeError(f"must be at least 1.0: {value}")
	return number


#============================================
def nonzero_int(value: str) -> int:
	try:
		number = int(value)
	except ValueError as error:
		raise argparse.ArgumentTypeError(f"not an integer: {value}") from error
	if number == 0:
		raise argparse.ArgumentTypeError("must not be 0")
	if number < 0 and number != UNLIMITED_LETTERS:
		raise argparse.ArgumentTypeError(f"must be positive or {UNLIMITED_LETTERS}: {value}")
	return number


#============================================
def page_size_type(value: str) -> tuple[float, float]:
	size = plc.page_sizes.parse_page_size(value)
	if size is None:
		raise argparse.ArgumentTypeError(f"unknown page size: {value}")
	return size


#============================================
def parse_color(value: str) -> int:
	"""
	Parse a color into a packed 0xRRGGBB value.

	Args:
		value: "#RRGGBB", "#RGB", or a ReportLab color name.

	Returns:
		Packed color.
	"""
	text = value.strip()
	if text.startswith("#"):
		digits = text[1:]
		if len(digits) == 3:
			digits = "".join(digit * 2 for digit in digits)
		if len(digits) != 6:
			raise argparse.ArgumentTypeError(f"invalid color: {value}")
		try:
			return int(digits, 16)
		except ValueError as error:
			raise argparse.ArgumentTypeError(f"invalid color: {value}") from error
	named_colors = {name.lower(): color for name, color in reportlab.lib.colors.getAllNamedColors().items()}
	named = named_colors.get(text.lower())
	if named is None:
		raise argparse.ArgumentTypeError(f"unknown color: {value}")
	red = int(round(named.red * 255))
	green = int(round(named.green * 255))
	blue = int(round(named.blue * 255))
	return (red << 16) | (green << 8) | blue


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(
		prog="pdfplaca",
		description="Render text as large placard pages in a PDF.",
	)
	parser.add_argument("--version", action="version", version=f"pdfplaca Version {VERSION}")

	text_group = parser.add_argument_group("Text")
	text_group.add_argument("--text", dest="text", default=DEFAULT_TEXT, help="Output text; \\n starts a new row.")
	text_group.add_argument("--vertical", dest="vertical", action="store_true", help="Use vertical writing.")
	text_group.add_argument(
		"--letters-per-page", dest="letters_per_page", type=nonzero_int, default=UNLIMITED_LETTERS,
		help="Letters per page, -1 for one page split by newlines.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=DEFAULT_OUTPUT, help="Output PDF path.")
	output_group.add_argument(
		"--page-size", dest="page_size", type=page_size_type, default=DEFAULT_PAGE_SIZE,
		help="Page size name or WIDTHxHEIGHT in mm.",
	)
	output_group.add_argument(
		"--landscape", dest="orientation", action="store_const", const=plc.page_sizes.LANDSCAPE,
		help="Use landscape orientation.",
	)
	output_group.add_argument(
		"--portrait", dest="orientation", action="store_const", const=plc.page_sizes.PORTRAIT,
		help="Use portrait orientation.",
	)
	output_group.add_argument("--margin", dest="margin", type=positive_float, default=DEFAULT_MARGIN_MM, help="Page margin in mm.")

	style_group = parser.add_argument_group("Style")
	style_group.add_argument("--font", dest="font_name", default=DEFAULT_FONT, help="Font name.")
	style_group.add_argument(
		"--font-file", dest="font_file", default=None,
		help="TrueType file registered under the --font name.",
	)
	style_group.add_argument("--text-color", dest="text_color", type=parse_color, default=DEFAULT_TEXT_COLOR, help="Text color.")
	style_group.add_argument("--back-color", dest="back_color", type=parse_color, default=DEFAULT_BACK_COLOR, help="Background color.")
	style_group.add_argument(
		"--threshold", dest="threshold", type=threshold_float, default=DEFAULT_THRESHOLD,
		help="Aspect ratio threshold, at least 1.0.",
	)
	style_group.add_argument(
		"--y-adjust", dest="y_adjust", type=finite_float, default=DEFAULT_Y_ADJUST_MM,
		help="Y adjustment in mm, positive moves text up.",
	)

	info_group = parser.add_argument_group("Info")
	info_group.add_argument("--font-list", dest="font_list", action="store_true", help="List font names and exit.")

	parser.set_defaults(
		orientation=DEFAULT_ORIENTATION,
		vertical=False,
		font_list=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def build_config(args: argparse.Namespace) -> PlacardConfig:
	"""
	Build placard config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		PlacardConfig.
	"""
	width_mm, height_mm = args.page_size
	page_width = plc.config.mm_to_points(width_mm)
	page_height = plc.config.mm_to_points(height_mm)
	page_width, page_height = plc.page_sizes.orient_page(page_width, page_height, args.orientation)
	margin = plc.config.mm_to_points(args.margin)
	geometry = plc.config.build_page_geometry(page_width, page_height, margin)
	config = PlacardConfig(
		text=args.text,
		geometry=geometry,
		vertical=args.vertical,
		font_name=args.font_name,
		text_color=args.text_color,
		back_color=args.back_color,
		threshold=args.threshold,
		y_adjust=-plc.config.mm_to_points(args.y_adjust),
		letters_per_page=args.letters_per_page,
	)
	return config


#============================================
def build_provider(args: argparse.Namespace) -> plc.metrics.CompositeMetrics:
	font_files = {}
	if args.font_file:
		font_files[args.font_name] = pathlib.Path(args.font_file)
	return plc.metrics.build_metrics_provider(font_files)


#============================================
def run_pipeline(args: argparse.Namespace) -> plc.config.RenderResult:
	"""
	Run the full pipeline from CLI args to the output PDF.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderResult.
	"""
	start_time = time.perf_counter()
	provider = build_provider(args)
	if not provider.has_font(args.font_name):
		raise ValueError(f"Unknown font: {args.font_name}")
	config = build_config(args)
	geometry = config.geometry
	print(f"page_width: {geometry.page_width:.6f} pt, page_height: {geometry.page_height:.6f} pt")
	print(f"Output PDF: {args.output_path}")

	output_path = pathlib.Path(args.output_path)
	result = plc.render.render_placard(config, provider, output_path, verbose=True)
	if result.font_name != config.font_name:
		print(f"Font fallback: {result.font_name}")
	print(f"Pages written: {result.pages}")
	if result.failed_rows:
		print(f"Rows not fitted: {result.failed_rows}/{result.rows}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.2f}s")
	return result


#============================================
def list_fonts(args: argparse.Namespace) -> None:
	provider = build_provider(args)
	for name in plc.metrics.list_font_names(provider):
		print(name)


#============================================
def main(argv: list[str] | None = None) -> int:
	"""
	Main entry point.

	Args:
		argv: Argument list, defaults to sys.argv.

	Returns:
		Process exit code.
	"""
	args = parse_args(argv)
	try:
		if args.font_list:
			list_fonts(args)
			return 0
		run_pipeline(args)
	except (OSError, ValueError, fontTools.ttLib.TTLibError, reportlab.pdfbase.ttfonts.TTFError) as error:
		print(f"ERROR: {error}")
		return 1
	return 0
