"""
Glyph categories that drive vertical placement.
"""

# Standard Library
import dataclasses

# local repo modules
import pdfplaca as plc
import pdfplaca.metrics


TextExtents = plc.metrics.TextExtents

SPACE = "space"
SMALL_KANA = "small_kana"
HYPHEN_DASH = "hyphen_dash"
PAREN_ROTATED = "paren_rotated"
PAREN_QUOTE_OPEN = "paren_quote_open"
PAREN_QUOTE_CLOSE = "paren_quote_close"
COMMA_PERIOD = "comma_period"
OTHER = "other"

# First match wins, so order is the priority.
CATEGORY_TABLE: tuple[tuple[str, frozenset[str]], ...] = (
	(SPACE, frozenset(" 　")),
	(SMALL_KANA, frozenset("ぁぃぅぇぉっゃゅょゎゕゖァィゥェォヵㇰヶㇱㇲッㇳㇴㇵㇶㇷㇸㇹㇺャュョㇻㇼㇽㇾㇿヮ")),
	(HYPHEN_DASH, frozenset("-－―ー=＝≡～")),
	(PAREN_ROTATED, frozenset("(（[［〔【｛〈《≪｟⁅〖〘«»〙〗⁆｠≫》〉｝】〕］]）)")),
	(PAREN_QUOTE_OPEN, frozenset("「『")),
	(PAREN_QUOTE_CLOSE, frozenset("』」")),
	(COMMA_PERIOD, frozenset("、。，．")),
)

PAREN_CATEGORIES = frozenset((PAREN_ROTATED, PAREN_QUOTE_OPEN, PAREN_QUOTE_CLOSE))
ROTATED_CATEGORIES = PAREN_CATEGORIES | {HYPHEN_DASH}


#============================================
def classify_char(char: str) -> str:
	"""
	Classify one character unit.

	Args:
		char: Character unit.

	Returns:
		Category name, OTHER when nothing matches.
	"""
	for category, members in CATEGORY_TABLE:
		if char in members:
			return category
	return OTHER


def is_space(char: str) -> bool:
	return classify_char(char) == SPACE


def is_small_kana(char: str) -> bool:
	return classify_char(char) == SMALL_KANA


def is_hyphen_dash(char: str) -> bool:
	return classify_char(char) == HYPHEN_DASH


def is_paren(char: str) -> bool:
	return classify_char(char) in PAREN_CATEGORIES


def is_comma_period(char: str) -> bool:
	return classify_char(char) == COMMA_PERIOD


#============================================
def is_rotated_category(category: str) -> bool:
	"""
	Check whether a category is drawn rotated in vertical mode.

	Args:
		category: Category name.

	Returns:
		True for dashes and brackets.
	"""
	return category in ROTATED_CATEGORIES


#============================================
def vertical_extents(char: str, extents: TextExtents) -> TextExtents:
	"""
	Get the extents a character occupies in a vertical column.

	Rotated glyphs swap width with height and x bearing with y bearing.

	Args:
		char: Character unit.
		extents: Horizontal extents.

	Returns:
		Extents as seen after rotation.
	"""
	if not is_rotated_category(classify_char(char)):
		return extents
	return dataclasses.replace(
		extents,
		width=extents.height,
		height=extents.width,
		x_bearing=extents.y_bearing,
		y_bearing=extents.x_bearing,
	)
