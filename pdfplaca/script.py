"""
Script classification for Japanese, Chinese and Korean text.
"""

# local repo modules
import pdfplaca as plc
import pdfplaca.utf8_lib


iter_code_points = plc.utf8_lib.iter_code_points

SCRIPT_NONE = 0
SCRIPT_WEAK = 1
SCRIPT_STRONG = 2

JAPANESE = "japanese"
CHINESE = "chinese"
KOREAN = "korean"

# Exemplar glyphs used to probe font coverage, and pairs for pitch checks.
SCRIPT_EXEMPLARS = {
	JAPANESE: "あ",
	CHINESE: "沉",
	KOREAN: "작",
}
SCRIPT_WIDE_PAIRS = {
	JAPANESE: "目目",
	CHINESE: "沉沉",
	KOREAN: "작작",
}

CJK_SYMBOLS = (0x3000, 0x303F)

JAPANESE_RANGES = (
	(SCRIPT_STRONG, 0x3040, 0x309F),  # Hiragana
	(SCRIPT_STRONG, 0x30A0, 0x30FF),  # Katakana
	(SCRIPT_STRONG, 0x31F0, 0x31FF),  # Katakana Phonetic Extensions
	(SCRIPT_WEAK, 0xFF01, 0xFF9D),  # Halfwidth and Fullwidth Forms
	(SCRIPT_WEAK, 0x3400, 0x4DB5),  # Kanji
	(SCRIPT_WEAK, 0x4E00, 0x9FCB),
	(SCRIPT_WEAK, 0xF900, 0xFA6A),
	(SCRIPT_WEAK, *CJK_SYMBOLS),
)

HAN_RANGES = (
	(0x4E00, 0x9FFF),  # CJK Unified Ideographs
	(0xF900, 0xFAFF),  # CJK Compatibility Ideographs
	(0x2F00, 0x2FDF),  # Kangxi Radicals
	(0x2E80, 0x2EFF),  # CJK Radicals Supplement
)

CHINESE_RANGES = HAN_RANGES + (
	(0x3400, 0x4DBF),  # Extension A
	(0x20000, 0x2A6DF),  # Extension B
	(0x2A700, 0x2B73F),  # Extension C
	(0x2B740, 0x2B81F),  # Extension D
	(0x2B820, 0x2CEAF),  # Extension E
	(0x2CEB0, 0x2EBEF),  # Extension F
	(0x30000, 0x3134F),  # Extension G
	(0x31350, 0x323AF),  # Extension H
	CJK_SYMBOLS,
	(0x2F800, 0x2FA1F),  # Compatibility Ideographs Supplement
)

KOREAN_RANGES = tuple((SCRIPT_WEAK, low, high) for low, high in HAN_RANGES) + (
	(SCRIPT_WEAK, *CJK_SYMBOLS),
	(SCRIPT_STRONG, 0xAC00, 0xD7AF),  # Hangul Syllables
	(SCRIPT_STRONG, 0x1100, 0x11FF),  # Hangul Jamo
	(SCRIPT_STRONG, 0x3130, 0x318F),  # Hangul Compatibility Jamo
	(SCRIPT_STRONG, 0xA960, 0xA97F),  # Hangul Jamo Extended-A
	(SCRIPT_STRONG, 0xD7B0, 0xD7FF),  # Hangul Jamo Extended-B
	(SCRIPT_STRONG, 0xFFA0, 0xFFDF),  # Halfwidth Hangul
)


#============================================
def _max_strength(text: bytes | str, ranges: tuple[tuple[int, int, int], ...]) -> int:
	"""
	Scan all code points and keep the strongest range match.

	Args:
		text: Text or UTF-8 bytes.
		ranges: Tuples of (strength, low, high).

	Returns:
		Strongest match, SCRIPT_NONE when malformed.
	"""
	strength = SCRIPT_NONE
	for code_point in iter_code_points(text):
		if code_point is None:
			return SCRIPT_NONE
		for level, low, high in ranges:
			if low <= code_point <= high and level > strength:
				strength = level
	return strength


#============================================
def is_japanese_text(text: bytes | str) -> int:
	"""
	Rate how strongly text looks Japanese.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		SCRIPT_STRONG for kana, SCRIPT_WEAK for kanji, fullwidth forms or
		CJK symbols, SCRIPT_NONE otherwise.
	"""
	return _max_strength(text, JAPANESE_RANGES)


#============================================
def is_chinese_text(text: bytes | str) -> int:
	"""
	Check whether text contains any Han ideograph or CJK symbol.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		SCRIPT_WEAK at the first match, SCRIPT_NONE otherwise.
	"""
	for code_point in iter_code_points(text):
		if code_point is None:
			return SCRIPT_NONE
		for low, high in CHINESE_RANGES:
			if low <= code_point <= high:
				return SCRIPT_WEAK
	return SCRIPT_NONE


#============================================
def is_korean_text(text: bytes | str) -> int:
	"""
	Rate how strongly text looks Korean.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		SCRIPT_STRONG for Hangul, SCRIPT_WEAK for Han ideographs or CJK
		symbols, SCRIPT_NONE otherwise.
	"""
	return _max_strength(text, KOREAN_RANGES)


#============================================
def classify_text(text: bytes | str) -> str | None:
	"""
	Pick the script used for the font coverage check.

	Japanese is checked first, then Chinese, then Korean.

	Args:
		text: Text or UTF-8 bytes.

	Returns:
		Script name or None.
	"""
	if is_japanese_text(text):
		return JAPANESE
	if is_chinese_text(text):
		return CHINESE
	if is_korean_text(text):
		return KOREAN
	return None
