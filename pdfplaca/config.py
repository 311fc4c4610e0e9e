"""
Shared configuration and constants.
"""

import dataclasses


VERSION = "0.85"

POINTS_PER_INCH = 72.0
MM_PER_INCH = 25.4

DEFAULT_TEXT = "This is\na test."
DEFAULT_OUTPUT = "output.pdf"
DEFAULT_PAGE_SIZE = "A4"
DEFAULT_ORIENTATION = "landscape"
DEFAULT_FONT = "Helvetica"
FALLBACK_FONT = "Helvetica"
DEFAULT_MARGIN_MM = 8.0
DEFAULT_TEXT_COLOR = 0x000000
DEFAULT_BACK_COLOR = 0xFFFFFF
DEFAULT_THRESHOLD = 1.5
DEFAULT_Y_ADJUST_MM = 0.0
UNLIMITED_LETTERS = -1

INITIAL_FONT_SIZE = 10.0
FONT_SIZE_CEILING = 10000.0
ISOTROPIC_THRESHOLD = 1.1
H_GROWTH = 1.1
H_BOX_FRACTION = 0.9
V_GROWTH = 1.05
V_BOX_FRACTION = 0.95

PROBE_FONT_SIZE = 30.0
MIN_INK_EXTENT = 1.0
PITCH_TOLERANCE = 0.25

SMALL_KANA_RATIO = 0.55
READABLE_GAP_DIVISOR = 5.0
SHRINK_FACTOR = 0.95
MAX_SHRINK_STEPS = 200

TAB_SPACES = "   "
PROGRESS_BAR_WIDTH = 20


@dataclasses.dataclass(frozen=True)
class FitSettings:
	font_growth: float
	scale_growth: float
	box_fraction: float
	initial_font_size: float = INITIAL_FONT_SIZE
	font_size_ceiling: float = FONT_SIZE_CEILING
	isotropic_threshold: float = ISOTROPIC_THRESHOLD


HORIZONTAL_FIT = FitSettings(font_growth=H_GROWTH, scale_growth=H_GROWTH, box_fraction=H_BOX_FRACTION)
VERTICAL_FIT = FitSettings(font_growth=V_GROWTH, scale_growth=V_GROWTH, box_fraction=V_BOX_FRACTION)


@dataclasses.dataclass(frozen=True)
class FitResult:
	font_size: float
	scale_x: float
	scale_y: float


@dataclasses.dataclass(frozen=True)
class PageGeometry:
	page_width: float
	page_height: float
	margin: float
	printable_width: float
	printable_height: float


@dataclasses.dataclass(frozen=True)
class PlacardConfig:
	text: str
	geometry: PageGeometry
	vertical: bool = False
	font_name: str = DEFAULT_FONT
	text_color: int = DEFAULT_TEXT_COLOR
	back_color: int = DEFAULT_BACK_COLOR
	threshold: float = DEFAULT_THRESHOLD
	y_adjust: float = 0.0
	letters_per_page: int = UNLIMITED_LETTERS
	horizontal_fit: FitSettings = HORIZONTAL_FIT
	vertical_fit: FitSettings = VERTICAL_FIT
	fallback_font: str = FALLBACK_FONT
	max_shrink_steps: int = MAX_SHRINK_STEPS


@dataclasses.dataclass(frozen=True)
class RenderResult:
	pages: int
	rows: int
	failed_rows: int
	fixed_pitch: bool
	font_name: str


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.

	Args:
		value: Millimeters value.

	Returns:
		Points value.
	"""
	return value * (POINTS_PER_INCH / MM_PER_INCH)


#============================================
def build_page_geometry(page_width: float, page_height: float, margin: float) -> PageGeometry:
	"""
	Build page geometry from page dimensions and a margin, all in points.

	Args:
		page_width: Page width.
		page_height: Page height.
		margin: Margin on every side.

	Returns:
		PageGeometry.
	"""
	return PageGeometry(
		page_width=page_width,
		page_height=page_height,
		margin=margin,
		printable_width=page_width - 2.0 * margin,
		printable_height=page_height - 2.0 * margin,
	)
