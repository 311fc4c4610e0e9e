"""
Render pipeline: text preparation, page layout, and PDF output.
"""

# Standard Library
import contextlib
import pathlib

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import pdfplaca as plc
import pdfplaca.config
import pdfplaca.metrics
import pdfplaca.normalize
import pdfplaca.pages
import pdfplaca.placement
import pdfplaca.script
import pdfplaca.utf8_lib


BackgroundBand = plc.pages.BackgroundBand
GlyphCommand = plc.placement.GlyphCommand
MetricsProvider = plc.metrics.MetricsProvider
Normalizer = plc.normalize.Normalizer
PageLayout = plc.pages.PageLayout
PlacardConfig = plc.config.PlacardConfig
RenderResult = plc.config.RenderResult

TAB_SPACES = plc.config.TAB_SPACES
PROGRESS_BAR_WIDTH = plc.config.PROGRESS_BAR_WIDTH

SCRIPT_CHECKS = (
	(plc.script.JAPANESE, plc.script.is_japanese_text, "Japanese"),
	(plc.script.CHINESE, plc.script.is_chinese_text, "Chinese"),
	(plc.script.KOREAN, plc.script.is_korean_text, "Korean"),
)


#============================================
def print_page_progress(current: int, total: int) -> None:
	"""
	Print the page status line.

	A single page prints a plain count. Longer runs redraw a bar in place
	and end the line after the last page.

	Args:
		current: Page number, starting at 1.
		total: Page count.
	"""
	if total == 1:
		print(f"Page {current}")
		return
	filled = PROGRESS_BAR_WIDTH * current // total
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	end = "\n" if current == total else "\r"
	print(f"Page [{bar}] {current}/{total}", end=end)


#============================================
def color_to_rgb(value: int) -> tuple[float, float, float]:
	"""
	Convert a 0xRRGGBB color into RGB floats.

	Args:
		value: Packed color.

	Returns:
		Tuple of (r, g, b) in 0.0-1.0 range.
	"""
	red = ((value >> 16) & 0xFF) / 255.0
	green = ((value >> 8) & 0xFF) / 255.0
	blue = (value & 0xFF) / 255.0
	return (red, green, blue)


#============================================
def font_error_text(language: str) -> str:
	return f"   Error:   \nNot {language} font"


#============================================
def prepare_text(config: PlacardConfig, provider: MetricsProvider) -> tuple[str, str, bool]:
	"""
	Apply the script check, repair undecodable bytes, unescape the text,
	and expand tabs.

	When the text is Japanese, Chinese or Korean and the font cannot draw
	that script, an error message is drawn in the fallback font instead.

	Args:
		config: Placard configuration.
		provider: Metrics provider.

	Returns:
		Tuple of (text, font_name, vertical).
	"""
	text = config.text
	font_name = config.font_name
	vertical = config.vertical
	for script, detect, language in SCRIPT_CHECKS:
		if not detect(text):
			continue
		if not plc.metrics.font_supports_script(provider, font_name, script):
			text = font_error_text(language)
			font_name = config.fallback_font
			vertical = False
		break
	text = plc.utf8_lib.replace_undecodable(text)
	text = plc.utf8_lib.mstr_unescape(text)
	text = text.replace("\t", TAB_SPACES)
	return (text, font_name, vertical)


#============================================
def layout_pages(
	config: PlacardConfig,
	provider: MetricsProvider,
	text: str,
	font_name: str,
	vertical: bool,
	normalizer: Normalizer = plc.normalize.to_fullwidth,
) -> list[PageLayout]:
	"""
	Split prepared text into pages and lay out each one.

	Args:
		config: Placard configuration.
		provider: Metrics provider.
		text: Prepared text.
		font_name: Font to draw with.
		vertical: Vertical writing flag.
		normalizer: Text mapping for vertical columns.

	Returns:
		One PageLayout per page.
	"""
	layouts: list[PageLayout] = []
	for page_text in plc.pages.split_pages(text, config.letters_per_page):
		layouts.append(
			plc.pages.layout_page(config, provider, page_text, font_name, vertical, normalizer)
		)
	return layouts


#============================================
def build_layouts(
	config: PlacardConfig,
	provider: MetricsProvider,
	normalizer: Normalizer = plc.normalize.to_fullwidth,
) -> list[PageLayout]:
	text, font_name, vertical = prepare_text(config, provider)
	return layout_pages(config, provider, text, font_name, vertical, normalizer)


class ReportLabCanvas:
	"""
	ReportLab canvas that accepts top-left origin page coordinates.
	"""

	def __init__(self, output_path: pathlib.Path, page_width: float, page_height: float) -> None:
		self.page_width = page_width
		self.page_height = page_height
		self.pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=(page_width, page_height))

	@contextlib.contextmanager
	def saved_state(self):
		self.pdf.saveState()
		try:
			yield self.pdf
		finally:
			self.pdf.restoreState()

	#============================================
	def fill_band(self, band: BackgroundBand) -> None:
		"""
		Fill a background band.

		Args:
			band: Band in top-left origin coordinates.
		"""
		red, green, blue = color_to_rgb(band.color)
		with self.saved_state() as pdf:
			pdf.setFillColorRGB(red, green, blue)
			pdf.rect(band.x, self.page_height - band.y - band.height, band.width, band.height, stroke=0, fill=1)

	#============================================
	def draw_glyph(self, command: GlyphCommand, color: int) -> None:
		"""
		Draw one glyph at its origin with scale and rotation.

		The y axis and the rotation sense are flipped from the command frame
		into PDF space.

		Args:
			command: GlyphCommand.
			color: Packed text color.
		"""
		red, green, blue = color_to_rgb(color)
		with self.saved_state() as pdf:
			pdf.setFillColorRGB(red, green, blue)
			pdf.translate(command.x, self.page_height - command.y)
			pdf.scale(command.scale_x, command.scale_y)
			if command.rotation:
				pdf.rotate(-command.rotation)
			pdf.setFont(command.font_name, command.font_size)
			pdf.drawString(0, 0, command.text)

	def show_page(self) -> None:
		self.pdf.showPage()

	def save(self) -> None:
		self.pdf.save()


#============================================
def draw_layout(canvas: ReportLabCanvas, layout: PageLayout, text_color: int) -> None:
	for band in layout.bands:
		canvas.fill_band(band)
	for command in layout.glyphs:
		canvas.draw_glyph(command, text_color)


#============================================
def render_placard(
	config: PlacardConfig,
	provider: MetricsProvider,
	output_path: pathlib.Path,
	normalizer: Normalizer = plc.normalize.to_fullwidth,
	verbose: bool = False,
) -> RenderResult:
	"""
	Render a placard to a PDF file.

	Args:
		config: Placard configuration.
		provider: Metrics provider.
		output_path: Output PDF path.
		normalizer: Text mapping for vertical columns.
		verbose: Print font kind and page progress.

	Returns:
		RenderResult.
	"""
	text, font_name, vertical = prepare_text(config, provider)
	fixed_pitch = plc.metrics.is_fixed_pitch_font(provider, font_name)
	if verbose:
		if fixed_pitch:
			print("fixed-pitch font")
		else:
			print("proportional font")

	layouts = layout_pages(config, provider, text, font_name, vertical, normalizer)
	geometry = config.geometry
	canvas = ReportLabCanvas(output_path, geometry.page_width, geometry.page_height)
	total = len(layouts)
	rows = 0
	failed_rows = 0
	for index, layout in enumerate(layouts, start=1):
		if verbose:
			print_page_progress(index, total)
		draw_layout(canvas, layout, config.text_color)
		canvas.show_page()
		rows += len(layout.font_size_by_row)
		failed_rows += len(layout.failed_rows)
	canvas.save()

	result = RenderResult(
		pages=total,
		rows=rows,
		failed_rows=failed_rows,
		fixed_pitch=fixed_pitch,
		font_name=font_name,
	)
	return result
