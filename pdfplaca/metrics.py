"""
Font metrics backends and font capability checks.

Extents follow the cairo conventions the layout code is written against:
y grows downward, y_bearing is negative for ink above the baseline, and
font descent is a positive distance below the baseline.
"""

# Standard Library
import dataclasses
import pathlib

# PIP3 modules
import fontTools.pens.boundsPen
import fontTools.ttLib
import reportlab.pdfbase.cidfonts
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

# local repo modules
import pdfplaca as plc
import pdfplaca.config
import pdfplaca.script
import pdfplaca.utf8_lib


split_chars = plc.utf8_lib.split_chars

PROBE_FONT_SIZE = plc.config.PROBE_FONT_SIZE
MIN_INK_EXTENT = plc.config.MIN_INK_EXTENT
PITCH_TOLERANCE = plc.config.PITCH_TOLERANCE

JAPANESE = plc.script.JAPANESE
CHINESE = plc.script.CHINESE
KOREAN = plc.script.KOREAN
SCRIPT_EXEMPLARS = plc.script.SCRIPT_EXEMPLARS
SCRIPT_WIDE_PAIRS = plc.script.SCRIPT_WIDE_PAIRS

CID_FONT_SCRIPTS = {
	"HeiseiMin-W3": JAPANESE,
	"HeiseiKakuGo-W5": JAPANESE,
	"STSong-Light": CHINESE,
	"MSung-Light": CHINESE,
	"HYSMyeongJo-Medium": KOREAN,
	"HYGothic-Medium": KOREAN,
}
FULLWIDTH_FORMS = (0xFF01, 0xFF5E)


@dataclasses.dataclass(frozen=True)
class TextExtents:
	x_bearing: float
	y_bearing: float
	width: float
	height: float
	x_advance: float


@dataclasses.dataclass(frozen=True)
class FontExtents:
	ascent: float
	descent: float
	height: float


EMPTY_EXTENTS = TextExtents(0.0, 0.0, 0.0, 0.0, 0.0)


class MetricsProvider:
	"""
	Measurement capability consumed by the layout code.

	Subclasses implement has_font, char_extents and font_extents.
	"""

	def has_font(self, font_name: str) -> bool:
		raise NotImplementedError

	def char_extents(self, font_name: str, size: float, char: str) -> TextExtents:
		raise NotImplementedError

	def font_extents(self, font_name: str, size: float) -> FontExtents:
		raise NotImplementedError

	#============================================
	def text_extents(self, font_name: str, size: float, text: str) -> TextExtents:
		"""
		Measure a string laid out on one baseline.

		Args:
			font_name: Font name.
			size: Font size in points.
			text: Text to measure.

		Returns:
			Union of the glyph ink boxes and the total advance.
		"""
		pen_x = 0.0
		box: list[float] | None = None
		for char in split_chars(text):
			extents = self.char_extents(font_name, size, char)
			if extents.width > 0.0 or extents.height > 0.0:
				left = pen_x + extents.x_bearing
				top = extents.y_bearing
				right = left + extents.width
				bottom = top + extents.height
				if box is None:
					box = [left, top, right, bottom]
				else:
					box = [min(box[0], left), min(box[1], top), max(box[2], right), max(box[3], bottom)]
			pen_x += extents.x_advance
		if box is None:
			return dataclasses.replace(EMPTY_EXTENTS, x_advance=pen_x)
		return TextExtents(
			x_bearing=box[0],
			y_bearing=box[1],
			width=box[2] - box[0],
			height=box[3] - box[1],
			x_advance=pen_x,
		)


class StandardFontMetrics(MetricsProvider):
	"""
	Metrics for fonts built into ReportLab.

	Covers the standard 14 Type1 fonts and the ReportLab CID fonts. These
	fonts carry advance widths only, so ink is approximated by the em box.
	"""

	def has_font(self, font_name: str) -> bool:
		if font_name in reportlab.pdfbase.pdfmetrics.standardFonts:
			return True
		return font_name in CID_FONT_SCRIPTS

	def _ensure_registered(self, font_name: str) -> None:
		if not self.has_font(font_name):
			raise ValueError(f"Unknown standard font: {font_name}")
		if font_name in CID_FONT_SCRIPTS:
			if font_name not in reportlab.pdfbase.pdfmetrics.getRegisteredFontNames():
				reportlab.pdfbase.pdfmetrics.registerFont(
					reportlab.pdfbase.cidfonts.UnicodeCIDFont(font_name)
				)

	def _covers(self, font_name: str, char: str) -> bool:
		script = CID_FONT_SCRIPTS.get(font_name)
		if script is None:
			try:
				char.encode("cp1252")
			except UnicodeEncodeError:
				return False
			return True
		code_point = ord(char)
		if code_point < 0x80 or FULLWIDTH_FORMS[0] <= code_point <= FULLWIDTH_FORMS[1]:
			return True
		if script == JAPANESE:
			return bool(plc.script.is_japanese_text(char))
		if script == CHINESE:
			return bool(plc.script.is_chinese_text(char))
		return bool(plc.script.is_korean_text(char))

	def char_extents(self, font_name: str, size: float, char: str) -> TextExtents:
		self._ensure_registered(font_name)
		if not self._covers(font_name, char):
			return EMPTY_EXTENTS
		advance = reportlab.pdfbase.pdfmetrics.stringWidth(char, font_name, size)
		if char.isspace():
			return dataclasses.replace(EMPTY_EXTENTS, x_advance=advance)
		ascent, descent = reportlab.pdfbase.pdfmetrics.getAscentDescent(font_name, size)
		return TextExtents(
			x_bearing=0.0,
			y_bearing=-ascent,
			width=advance,
			height=ascent - descent,
			x_advance=advance,
		)

	def font_extents(self, font_name: str, size: float) -> FontExtents:
		self._ensure_registered(font_name)
		ascent, descent = reportlab.pdfbase.pdfmetrics.getAscentDescent(font_name, size)
		return FontExtents(ascent=ascent, descent=-descent, height=ascent - descent)


class TrueTypeFontMetrics(MetricsProvider):
	"""
	Exact glyph metrics from TrueType files read with fontTools.

	Each file is also registered with ReportLab under the same name so the
	PDF output uses the font that was measured.
	"""

	def __init__(self) -> None:
		self._fonts: dict[str, fontTools.ttLib.TTFont] = {}
		self._cmaps: dict[str, dict[int, str]] = {}
		self._bounds: dict[tuple[str, str], tuple[float, float, float, float] | None] = {}

	#============================================
	def register_font_file(self, font_name: str, font_path: pathlib.Path) -> None:
		"""
		Load a TrueType file for measuring and drawing.

		Args:
			font_name: Name used to refer to the font.
			font_path: Path to a .ttf file.
		"""
		ttfont = fontTools.ttLib.TTFont(str(font_path))
		if font_name not in reportlab.pdfbase.pdfmetrics.getRegisteredFontNames():
			reportlab.pdfbase.pdfmetrics.registerFont(
				reportlab.pdfbase.ttfonts.TTFont(font_name, str(font_path))
			)
		self._fonts[font_name] = ttfont
		self._cmaps[font_name] = ttfont.getBestCmap() or {}

	def has_font(self, font_name: str) -> bool:
		return font_name in self._fonts

	def font_names(self) -> list[str]:
		return sorted(self._fonts)

	def _glyph_bounds(self, font_name: str, glyph_name: str) -> tuple[float, float, float, float] | None:
		key = (font_name, glyph_name)
		if key not in self._bounds:
			glyph_set = self._fonts[font_name].getGlyphSet()
			pen = fontTools.pens.boundsPen.BoundsPen(glyph_set)
			glyph_set[glyph_name].draw(pen)
			self._bounds[key] = pen.bounds
		return self._bounds[key]

	def char_extents(self, font_name: str, size: float, char: str) -> TextExtents:
		ttfont = self._fonts[font_name]
		glyph_name = self._cmaps[font_name].get(ord(char))
		if glyph_name is None:
			return EMPTY_EXTENTS
		scale = size / ttfont["head"].unitsPerEm
		advance = ttfont["hmtx"][glyph_name][0] * scale
		bounds = self._glyph_bounds(font_name, glyph_name)
		if bounds is None:
			return dataclasses.replace(EMPTY_EXTENTS, x_advance=advance)
		x_min, y_min, x_max, y_max = bounds
		return TextExtents(
			x_bearing=x_min * scale,
			y_bearing=-y_max * scale,
			width=(x_max - x_min) * scale,
			height=(y_max - y_min) * scale,
			x_advance=advance,
		)

	def font_extents(self, font_name: str, size: float) -> FontExtents:
		ttfont = self._fonts[font_name]
		scale = size / ttfont["head"].unitsPerEm
		hhea = ttfont["hhea"]
		return FontExtents(
			ascent=hhea.ascent * scale,
			descent=-hhea.descent * scale,
			height=(hhea.ascent - hhea.descent + hhea.lineGap) * scale,
		)


class CompositeMetrics(MetricsProvider):
	"""
	Dispatch each font name to the first backend that knows it.
	"""

	def __init__(self, providers: list[MetricsProvider]) -> None:
		self.providers = providers

	def _provider_for(self, font_name: str) -> MetricsProvider:
		for provider in self.providers:
			if provider.has_font(font_name):
				return provider
		raise ValueError(f"Unknown font: {font_name}")

	def has_font(self, font_name: str) -> bool:
		return any(provider.has_font(font_name) for provider in self.providers)

	def char_extents(self, font_name: str, size: float, char: str) -> TextExtents:
		return self._provider_for(font_name).char_extents(font_name, size, char)

	def font_extents(self, font_name: str, size: float) -> FontExtents:
		return self._provider_for(font_name).font_extents(font_name, size)


#============================================
def build_metrics_provider(font_files: dict[str, pathlib.Path] | None = None) -> CompositeMetrics:
	"""
	Build the default provider: registered TrueType files, then built-ins.

	Args:
		font_files: Optional mapping of font name to TrueType path.

	Returns:
		CompositeMetrics.
	"""
	truetype = TrueTypeFontMetrics()
	for font_name, font_path in (font_files or {}).items():
		truetype.register_font_file(font_name, font_path)
	return CompositeMetrics([truetype, StandardFontMetrics()])


#============================================
def list_font_names(provider: CompositeMetrics) -> list[str]:
	"""
	List every font name the provider can measure.

	Args:
		provider: Composite provider.

	Returns:
		Sorted font names.
	"""
	names = set(reportlab.pdfbase.pdfmetrics.standardFonts)
	names.update(CID_FONT_SCRIPTS)
	for backend in provider.providers:
		if isinstance(backend, TrueTypeFontMetrics):
			names.update(backend.font_names())
	return sorted(names)


#============================================
def font_supports_script(provider: MetricsProvider, font_name: str, script: str) -> bool:
	"""
	Check whether a font draws visible ink for a script's exemplar glyph.

	Args:
		provider: Metrics provider.
		font_name: Font name.
		script: One of the script names.

	Returns:
		True if the exemplar is at least one unit wide and tall.
	"""
	extents = provider.text_extents(font_name, PROBE_FONT_SIZE, SCRIPT_EXEMPLARS[script])
	return not (extents.width < MIN_INK_EXTENT or extents.height < MIN_INK_EXTENT)


def font_supports_cjk(provider: MetricsProvider, font_name: str) -> bool:
	return any(font_supports_script(provider, font_name, script) for script in (JAPANESE, CHINESE, KOREAN))


def is_nearly_equal(x0: float, x1: float) -> bool:
	return abs(x1 - x0) < PITCH_TOLERANCE


#============================================
def is_fixed_pitch_font(provider: MetricsProvider, font_name: str) -> bool:
	"""
	Guess whether a font is monospaced.

	Four "w" glyphs are compared against two wide glyphs of the first script
	the font supports, or against four "i" glyphs for Latin-only fonts.

	Args:
		provider: Metrics provider.
		font_name: Font name.

	Returns:
		True if both advances are nearly equal.
	"""
	x0 = provider.text_extents(font_name, PROBE_FONT_SIZE, "wwww").x_advance
	sample = "iiii"
	for script in (JAPANESE, CHINESE, KOREAN):
		if font_supports_script(provider, font_name, script):
			sample = SCRIPT_WIDE_PAIRS[script]
			break
	x1 = provider.text_extents(font_name, PROBE_FONT_SIZE, sample).x_advance
	return is_nearly_equal(x0, x1)
