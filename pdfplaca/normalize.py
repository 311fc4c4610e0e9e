"""
Halfwidth to fullwidth text mapping for vertical layout.
"""

# Standard Library
import typing
import unicodedata


Normalizer = typing.Callable[[str], str]

ASCII_FIRST = 0x21
ASCII_LAST = 0x7E
FULLWIDTH_OFFSET = 0xFEE0
HALFWIDTH_FIRST = 0xFF61
HALFWIDTH_LAST = 0xFF9F

# Private use placeholders so a mapper never sees the two space characters.
SPACE_PLACEHOLDERS = (
	(" ", "\ue000"),
	("\u3000", "\ue001"),
)
SPACING_MARKS = {
	"\u3099": "\u309b",
	"\u309a": "\u309c",
}


#============================================
def _is_halfwidth(char: str) -> bool:
	return HALFWIDTH_FIRST <= ord(char) <= HALFWIDTH_LAST


#============================================
def _widen_halfwidth_run(run: str) -> str:
	"""
	Widen halfwidth katakana and punctuation, composing sound marks.

	Args:
		run: Consecutive halfwidth characters.

	Returns:
		Fullwidth text.
	"""
	widened = unicodedata.normalize("NFKC", run)
	for mark, spacing in SPACING_MARKS.items():
		widened = widened.replace(mark, spacing)
	return widened


#============================================
def to_fullwidth(text: str) -> str:
	"""
	Map printable ASCII and halfwidth katakana to fullwidth forms.

	Spaces are left alone.

	Args:
		text: Input text.

	Returns:
		Mapped text.
	"""
	result: list[str] = []
	run: list[str] = []
	for char in text:
		if _is_halfwidth(char):
			run.append(char)
			continue
		if run:
			result.append(_widen_halfwidth_run("".join(run)))
			run = []
		code_point = ord(char)
		if ASCII_FIRST <= code_point <= ASCII_LAST:
			result.append(chr(code_point + FULLWIDTH_OFFSET))
		else:
			result.append(char)
	if run:
		result.append(_widen_halfwidth_run("".join(run)))
	return "".join(result)


#============================================
def map_vertical_text(text: str, normalizer: Normalizer = to_fullwidth) -> str:
	"""
	Apply a normalizer while keeping both kinds of space intact.

	Args:
		text: Input text.
		normalizer: String mapping to apply.

	Returns:
		Mapped text.
	"""
	for space, placeholder in SPACE_PLACEHOLDERS:
		text = text.replace(space, placeholder)
	text = normalizer(text)
	for space, placeholder in SPACE_PLACEHOLDERS:
		text = text.replace(placeholder, space)
	return text
