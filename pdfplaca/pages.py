"""
Page splitting and per-page band layout.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import pdfplaca as plc
import pdfplaca.config
import pdfplaca.metrics
import pdfplaca.normalize
import pdfplaca.placement
import pdfplaca.utf8_lib


FitResult = plc.config.FitResult
GlyphCommand = plc.placement.GlyphCommand
MetricsProvider = plc.metrics.MetricsProvider
PlacardConfig = plc.config.PlacardConfig
Normalizer = plc.normalize.Normalizer

UNLIMITED_LETTERS = plc.config.UNLIMITED_LETTERS


@dataclasses.dataclass(frozen=True)
class BackgroundBand:
	x: float
	y: float
	width: float
	height: float
	color: int


@dataclasses.dataclass
class PageLayout:
	bands: list[BackgroundBand] = dataclasses.field(default_factory=list)
	glyphs: list[GlyphCommand] = dataclasses.field(default_factory=list)
	font_size_by_row: list[float | None] = dataclasses.field(default_factory=list)
	failed_rows: list[int] = dataclasses.field(default_factory=list)


#============================================
def split_rows(text: str) -> list[str]:
	return plc.utf8_lib.split_by_newlines(text)


#============================================
def split_pages(text: str, letters_per_page: int) -> list[str]:
	"""
	Split text into page texts.

	With no limit the whole text is one page and rows come from newlines.
	With a limit, whitespace is dropped and the characters are chunked.

	Args:
		text: Input text.
		letters_per_page: Characters per page, or -1 for no limit.

	Returns:
		List of page texts.
	"""
	if letters_per_page == UNLIMITED_LETTERS:
		return [text]
	if letters_per_page <= 0:
		raise ValueError(f"letters_per_page must be positive or {UNLIMITED_LETTERS}: {letters_per_page}")
	chars = plc.utf8_lib.split_chars(plc.utf8_lib.strip_whitespace(text))
	page_count = math.ceil(len(chars) / letters_per_page)
	pages: list[str] = []
	for index in range(page_count):
		start = index * letters_per_page
		pages.append("".join(chars[start:start + letters_per_page]))
	return pages


#============================================
def _record_row(layout: PageLayout, index: int, row: str, fit: FitResult | None, commands: list[GlyphCommand]) -> None:
	if fit is None:
		layout.font_size_by_row.append(None)
		if row:
			layout.failed_rows.append(index)
		return
	layout.font_size_by_row.append(fit.font_size)
	layout.glyphs.extend(commands)


#============================================
def layout_horizontal_page(
	config: PlacardConfig,
	provider: MetricsProvider,
	font_name: str,
	rows: list[str],
) -> PageLayout:
	"""
	Stack rows top to bottom with a margin between them.

	Args:
		config: Placard configuration.
		provider: Metrics provider.
		font_name: Font to draw with.
		rows: Row texts.

	Returns:
		PageLayout.
	"""
	geometry = config.geometry
	layout = PageLayout()
	count = len(rows)
	row_height = (geometry.page_height - geometry.margin * (count + 1)) / count
	y = geometry.margin
	for index, row in enumerate(rows):
		layout.bands.append(
			BackgroundBand(
				x=geometry.margin,
				y=y,
				width=geometry.printable_width,
				height=row_height,
				color=config.back_color,
			)
		)
		fit, commands = plc.placement.draw_row(
			provider,
			font_name,
			row,
			geometry.margin,
			y,
			geometry.printable_width,
			row_height,
			config.threshold,
			False,
			config.horizontal_fit,
			config.y_adjust,
			config.max_shrink_steps,
		)
		_record_row(layout, index, row, fit, commands)
		y += row_height + geometry.margin
	return layout


#============================================
def layout_vertical_page(
	config: PlacardConfig,
	provider: MetricsProvider,
	font_name: str,
	rows: list[str],
) -> PageLayout:
	"""
	Lay columns right to left with a margin between them.

	Args:
		config: Placard configuration.
		provider: Metrics provider.
		font_name: Font to draw with.
		rows: Column texts, first column rightmost.

	Returns:
		PageLayout.
	"""
	geometry = config.geometry
	layout = PageLayout()
	count = len(rows)
	column_width = (geometry.page_width - geometry.margin * (count + 1)) / count
	x = 0.0
	for index, row in enumerate(rows):
		x += geometry.margin
		x0 = geometry.page_width - x - column_width
		layout.bands.append(
			BackgroundBand(
				x=x0,
				y=geometry.margin,
				width=column_width,
				height=geometry.printable_height,
				color=config.back_color,
			)
		)
		fit, commands = plc.placement.draw_row(
			provider,
			font_name,
			row,
			x0,
			geometry.margin,
			column_width,
			geometry.printable_height,
			config.threshold,
			True,
			config.vertical_fit,
			config.y_adjust,
			config.max_shrink_steps,
		)
		_record_row(layout, index, row, fit, commands)
		x += column_width
	return layout


#============================================
def layout_page(
	config: PlacardConfig,
	provider: MetricsProvider,
	text: str,
	font_name: str | None = None,
	vertical: bool | None = None,
	normalizer: Normalizer = plc.normalize.to_fullwidth,
) -> PageLayout:
	"""
	Lay out one page of text.

	Args:
		config: Placard configuration.
		provider: Metrics provider.
		text: Page text, rows separated by newlines.
		font_name: Font override, defaults to config.font_name.
		vertical: Writing mode override, defaults to config.vertical.
		normalizer: Text mapping for vertical columns in CJK fonts.

	Returns:
		PageLayout.
	"""
	if font_name is None:
		font_name = config.font_name
	if vertical is None:
		vertical = config.vertical
	rows = split_rows(text)
	if not vertical:
		return layout_horizontal_page(config, provider, font_name, rows)
	if plc.metrics.font_supports_cjk(provider, font_name):
		rows = [plc.normalize.map_vertical_text(row, normalizer) for row in rows]
	return layout_vertical_page(config, provider, font_name, rows)
