"""
Per-character placement for horizontal rows and vertical columns.

Commands use page coordinates with the origin at the top-left corner and y
growing downward. Rotation is in degrees in that frame.
"""

# Standard Library
import dataclasses

# local repo modules
import pdfplaca as plc
import pdfplaca.config
import pdfplaca.fitting
import pdfplaca.glyphs
import pdfplaca.metrics
import pdfplaca.utf8_lib


FitResult = plc.config.FitResult
FitSettings = plc.config.FitSettings
MetricsProvider = plc.metrics.MetricsProvider
TextExtents = plc.metrics.TextExtents

SMALL_KANA_RATIO = plc.config.SMALL_KANA_RATIO
READABLE_GAP_DIVISOR = plc.config.READABLE_GAP_DIVISOR
SHRINK_FACTOR = plc.config.SHRINK_FACTOR
MAX_SHRINK_STEPS = plc.config.MAX_SHRINK_STEPS
COMMA_PERIOD_SHIFT = 0.75


@dataclasses.dataclass(frozen=True)
class GlyphCommand:
	text: str
	font_name: str
	font_size: float
	x: float
	y: float
	scale_x: float
	scale_y: float
	rotation: float = 0.0


#============================================
def place_horizontal(
	provider: MetricsProvider,
	font_name: str,
	text: str,
	fit: FitResult,
	x0: float,
	y0: float,
	width: float,
	height: float,
	y_adjust: float = 0.0,
) -> list[GlyphCommand]:
	"""
	Place one row of characters on a shared baseline.

	Leftover width is split into equal gaps before every glyph and after the
	last one.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		text: Row text.
		fit: Fit for this row.
		x0: Box left.
		y0: Box top.
		width: Box width.
		height: Box height.
		y_adjust: Baseline offset.

	Returns:
		One command per character.
	"""
	chars = plc.utf8_lib.split_chars(text)
	if not chars:
		return []
	font_size = fit.font_size
	font_extents = provider.font_extents(font_name, font_size)
	all_extents = [provider.text_extents(font_name, font_size, char) for char in chars]
	total_width = sum(extents.x_advance for extents in all_extents) * fit.scale_x
	each_blank = (width - total_width) / (len(chars) + 1)
	top = y0 + (height - font_extents.height * fit.scale_y) / 2.0
	baseline = top + y_adjust + font_extents.ascent * fit.scale_y

	commands: list[GlyphCommand] = []
	x = x0
	for char, extents in zip(chars, all_extents):
		x += each_blank
		commands.append(
			GlyphCommand(
				text=char,
				font_name=font_name,
				font_size=font_size,
				x=x,
				y=baseline,
				scale_x=fit.scale_x,
				scale_y=fit.scale_y,
			)
		)
		x += extents.x_advance * fit.scale_x
	return commands


#============================================
def place_vertical_char(
	char: str,
	extents: TextExtents,
	font_name: str,
	font_size: float,
	x: float,
	y: float,
	scale_x: float,
	scale_y: float,
) -> GlyphCommand:
	"""
	Build the command for one character of a vertical column.

	Args:
		char: Character unit.
		extents: Horizontal extents of the character.
		font_name: Font name.
		font_size: Font size in points.
		x: Column center line.
		y: Top of the character cell.
		scale_x: Horizontal scale.
		scale_y: Vertical scale.

	Returns:
		GlyphCommand.
	"""
	category = plc.glyphs.classify_char(char)
	if category == plc.glyphs.COMMA_PERIOD:
		x += extents.width * scale_x * COMMA_PERIOD_SHIFT
	if category == plc.glyphs.SMALL_KANA:
		scale_x *= SMALL_KANA_RATIO
		scale_y *= SMALL_KANA_RATIO
		x += extents.width * scale_x * 0.5

	rotated = plc.glyphs.vertical_extents(char, extents)
	scaled_width = rotated.width * scale_x
	y_pos = y - rotated.y_bearing * scale_y
	rotation = 90.0
	if category == plc.glyphs.HYPHEN_DASH:
		# Mirrored then turned so the stroke runs down the column.
		x_pos = x - rotated.x_bearing * scale_x - scaled_width / 2.0
		scale_y = -scale_y
		rotation = -90.0
	elif category == plc.glyphs.PAREN_ROTATED:
		x_pos = x - scaled_width * 0.55 + rotated.height * scale_x / 2.0
	elif category == plc.glyphs.PAREN_QUOTE_OPEN:
		x_pos = x + scaled_width * 0.6 + rotated.x_bearing * scale_x
	elif category == plc.glyphs.PAREN_QUOTE_CLOSE:
		x_pos = x - scaled_width * 0.55 + rotated.y_bearing * scale_x
	else:
		x_pos = x - extents.x_advance * scale_x / 2.0
		rotation = 0.0
	return GlyphCommand(
		text=char,
		font_name=font_name,
		font_size=font_size,
		x=x_pos,
		y=y_pos,
		scale_x=scale_x,
		scale_y=scale_y,
		rotation=rotation,
	)


#============================================
def vertical_advance(char: str, extents: TextExtents, scale_y: float) -> float:
	"""
	Get how far a character moves the column pen down.

	Args:
		char: Character unit.
		extents: Horizontal extents of the character.
		scale_y: Vertical scale.

	Returns:
		Advance in points.
	"""
	category = plc.glyphs.classify_char(char)
	if category == plc.glyphs.SPACE:
		return extents.x_advance * scale_y
	if category == plc.glyphs.SMALL_KANA:
		return extents.height * scale_y * SMALL_KANA_RATIO
	if plc.glyphs.is_rotated_category(category):
		return extents.width * scale_y
	return extents.height * scale_y


#============================================
def readable_scales(
	fit: FitResult,
	text_height: float,
	box_height: float,
	count: int,
	max_shrink_steps: int = MAX_SHRINK_STEPS,
) -> tuple[float, float, float]:
	"""
	Shrink both scales until glyphs in a column keep a minimum gap.

	Args:
		fit: Fit for the column.
		text_height: Unscaled column height.
		box_height: Column box height.
		count: Number of characters.
		max_shrink_steps: Upper bound on shrink steps.

	Returns:
		Tuple of (scale_x, scale_y, gap).
	"""
	scale_x = fit.scale_x
	scale_y = fit.scale_y
	min_gap = fit.font_size / READABLE_GAP_DIVISOR
	each_blank = (box_height - text_height * scale_y) / (count + 1)
	steps = 0
	while each_blank < min_gap and steps < max_shrink_steps:
		scale_x *= SHRINK_FACTOR
		scale_y *= SHRINK_FACTOR
		each_blank = (box_height - text_height * scale_y) / (count + 1)
		steps += 1
	return (scale_x, scale_y, each_blank)


#============================================
def place_vertical(
	provider: MetricsProvider,
	font_name: str,
	text: str,
	fit: FitResult,
	x0: float,
	y0: float,
	width: float,
	height: float,
	y_adjust: float = 0.0,
	max_shrink_steps: int = MAX_SHRINK_STEPS,
) -> list[GlyphCommand]:
	"""
	Place one column of characters top to bottom.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		text: Column text, already normalized.
		fit: Fit for this column.
		x0: Box left.
		y0: Box top.
		width: Box width.
		height: Box height.
		y_adjust: Vertical offset.
		max_shrink_steps: Upper bound on readability shrink steps.

	Returns:
		One command per character.
	"""
	chars = plc.utf8_lib.split_chars(text)
	if not chars:
		return []
	font_size = fit.font_size
	_text_width, text_height = plc.fitting.measure_vertical(provider, font_name, font_size, chars)
	scale_x, scale_y, each_blank = readable_scales(fit, text_height, height, len(chars), max_shrink_steps)

	commands: list[GlyphCommand] = []
	center_x = x0 + width / 2.0
	y = y0
	for char in chars:
		y += each_blank
		extents = provider.text_extents(font_name, font_size, char)
		commands.append(
			place_vertical_char(char, extents, font_name, font_size, center_x, y + y_adjust, scale_x, scale_y)
		)
		y += vertical_advance(char, extents, scale_y)
	return commands


#============================================
def draw_row(
	provider: MetricsProvider,
	font_name: str,
	text: str,
	x0: float,
	y0: float,
	width: float,
	height: float,
	threshold: float,
	vertical: bool,
	settings: FitSettings,
	y_adjust: float = 0.0,
	max_shrink_steps: int = MAX_SHRINK_STEPS,
) -> tuple[FitResult | None, list[GlyphCommand]]:
	"""
	Fit and place one row or column.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		text: Row text.
		x0: Box left.
		y0: Box top.
		width: Box width.
		height: Box height.
		threshold: Aspect ratio threshold.
		vertical: Vertical writing flag.
		settings: Growth settings for the writing mode.
		y_adjust: Baseline offset.
		max_shrink_steps: Upper bound on readability shrink steps.

	Returns:
		Tuple of (fit, commands); fit is None and commands empty on failure.
	"""
	if vertical:
		fit = plc.fitting.fit_vertical(provider, font_name, text, width, height, threshold, settings)
		if fit is None:
			return (None, [])
		commands = place_vertical(
			provider, font_name, text, fit, x0, y0, width, height, y_adjust, max_shrink_steps,
		)
		return (fit, commands)
	fit = plc.fitting.fit_horizontal(provider, font_name, text, width, height, threshold, settings)
	if fit is None:
		return (None, [])
	commands = place_horizontal(provider, font_name, text, fit, x0, y0, width, height, y_adjust)
	return (fit, commands)
