"""
Font size and scale fitting for one row or column of text.
"""

# Standard Library
import typing

# local repo modules
import pdfplaca as plc
import pdfplaca.config
import pdfplaca.glyphs
import pdfplaca.metrics
import pdfplaca.utf8_lib


FitResult = plc.config.FitResult
FitSettings = plc.config.FitSettings
MetricsProvider = plc.metrics.MetricsProvider

HORIZONTAL_FIT = plc.config.HORIZONTAL_FIT
VERTICAL_FIT = plc.config.VERTICAL_FIT
SMALL_KANA_RATIO = plc.config.SMALL_KANA_RATIO

MeasureFunc = typing.Callable[[MetricsProvider, str, float, list[str]], tuple[float, float]]


#============================================
def measure_horizontal(
	provider: MetricsProvider,
	font_name: str,
	font_size: float,
	chars: list[str],
) -> tuple[float, float]:
	"""
	Measure characters laid out on one baseline.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		font_size: Font size in points.
		chars: Character units.

	Returns:
		Tuple of (total advance, tallest of ink height and font height).
	"""
	font_extents = provider.font_extents(font_name, font_size)
	text_width = 0.0
	text_height = 0.0
	for char in chars:
		extents = provider.text_extents(font_name, font_size, char)
		text_height = max(text_height, extents.height, font_extents.height)
		text_width += extents.x_advance
	return (text_width, text_height)


#============================================
def measure_vertical(
	provider: MetricsProvider,
	font_name: str,
	font_size: float,
	chars: list[str],
) -> tuple[float, float]:
	"""
	Measure characters stacked in one column.

	Rotated glyphs contribute their ink height to the column width and their
	ink width to the column height. Spaces stack by their advance.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		font_size: Font size in points.
		chars: Character units.

	Returns:
		Tuple of (column width, column height).
	"""
	text_width = 0.0
	text_height = 0.0
	for char in chars:
		extents = provider.text_extents(font_name, font_size, char)
		category = plc.glyphs.classify_char(char)
		if category == plc.glyphs.SPACE:
			text_width = max(text_width, extents.width)
			text_height += extents.x_advance
		elif category == plc.glyphs.SMALL_KANA:
			text_width = max(text_width, extents.width * SMALL_KANA_RATIO)
			text_height += extents.height * SMALL_KANA_RATIO
		elif plc.glyphs.is_rotated_category(category):
			text_width = max(text_width, extents.height)
			text_height += extents.width
		else:
			text_width = max(text_width, extents.width)
			text_height += extents.height
	return (text_width, text_height)


#============================================
def grow_to_fit(
	provider: MetricsProvider,
	font_name: str,
	chars: list[str],
	width: float,
	height: float,
	threshold: float,
	settings: FitSettings,
	measure: MeasureFunc,
) -> tuple[float, float, float] | None:
	"""
	Grow the font size, then each scale, until the text fills the box.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		chars: Character units.
		width: Box width.
		height: Box height.
		threshold: Aspect ratio threshold.
		settings: Growth rates and box fraction.
		measure: Measuring function for the writing mode.

	Returns:
		Tuple of (font_size, scale_x, scale_y), or None when the text has no
		extent or the font size reaches the ceiling.
	"""
	font_size = settings.initial_font_size
	scale_x = 1.0
	scale_y = 1.0
	limit_width = width * settings.box_fraction
	limit_height = height * settings.box_fraction
	while True:
		text_width, text_height = measure(provider, font_name, font_size, chars)
		if font_size >= settings.font_size_ceiling or not text_width or not text_height:
			return None
		width_fits = text_width * scale_x < limit_width
		height_fits = text_height * scale_y < limit_height
		if width_fits and height_fits:
			font_size *= settings.font_growth
		elif threshold < settings.isotropic_threshold:
			break
		elif width_fits:
			scale_x *= settings.scale_growth
		elif height_fits:
			scale_y *= settings.scale_growth
		else:
			break
	return (font_size, scale_x, scale_y)


#============================================
def fit_horizontal(
	provider: MetricsProvider,
	font_name: str,
	text: str,
	width: float,
	height: float,
	threshold: float,
	settings: FitSettings = HORIZONTAL_FIT,
) -> FitResult | None:
	"""
	Fit one row of text into a box.

	The aspect ratio is taken per character: each glyph's share of the row
	width against the row height.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		text: Row text.
		width: Box width.
		height: Box height.
		threshold: Aspect ratio threshold.
		settings: Growth settings.

	Returns:
		FitResult or None on failure.
	"""
	if not text:
		return None
	chars = plc.utf8_lib.split_chars(text)
	grown = grow_to_fit(provider, font_name, chars, width, height, threshold, settings, measure_horizontal)
	if grown is None:
		return None
	font_size, scale_x, scale_y = grown
	count = len(chars)
	text_width, text_height = measure_horizontal(provider, font_name, font_size, chars)
	if (text_width * scale_x / count) / (text_height * scale_y) > threshold:
		scale_x = threshold * (text_height * scale_y) * count / text_width
	if (text_height * scale_y) / (text_width * scale_x / count) > threshold:
		scale_y = threshold * (text_width * scale_x / count) / text_height
	return FitResult(font_size=font_size, scale_x=scale_x, scale_y=scale_y)


#============================================
def fit_vertical(
	provider: MetricsProvider,
	font_name: str,
	text: str,
	width: float,
	height: float,
	threshold: float,
	settings: FitSettings = VERTICAL_FIT,
) -> FitResult | None:
	"""
	Fit one column of text into a box.

	The aspect ratio is taken per character: the column width against each
	glyph's share of the column height.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		text: Column text.
		width: Box width.
		height: Box height.
		threshold: Aspect ratio threshold.
		settings: Growth settings.

	Returns:
		FitResult or None on failure.
	"""
	if not text:
		return None
	chars = plc.utf8_lib.split_chars(text)
	grown = grow_to_fit(provider, font_name, chars, width, height, threshold, settings, measure_vertical)
	if grown is None:
		return None
	font_size, scale_x, scale_y = grown
	count = len(chars)
	text_width, text_height = measure_vertical(provider, font_name, font_size, chars)
	if (text_width * scale_x) / (text_height * scale_y / count) > threshold:
		scale_x = threshold * (text_height * scale_y / count) / text_width
	elif (text_height * scale_y / count) / (text_width * scale_x) > threshold:
		scale_y = threshold * (text_width * scale_x) * count / text_height
	return FitResult(font_size=font_size, scale_x=scale_x, scale_y=scale_y)
