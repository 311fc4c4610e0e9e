import pdfplaca.normalize as normalize


#============================================
def test_ascii_to_fullwidth() -> None:
	assert normalize.to_fullwidth("AZ09!~") == "ＡＺ０９！～"


#============================================
def test_halfwidth_katakana_widened() -> None:
	"""
	Halfwidth katakana compose with their sound marks.
	"""
	assert normalize.to_fullwidth("ｶﾞｷﾞ") == "ガギ"
	assert normalize.to_fullwidth("ｱｲｳ") == "アイウ"


#============================================
def test_lone_sound_mark_becomes_spacing_mark() -> None:
	assert normalize.to_fullwidth("ﾞ") == "゛"


#============================================
def test_non_ascii_untouched() -> None:
	assert normalize.to_fullwidth("日本語") == "日本語"


#============================================
def test_map_vertical_text_keeps_spaces() -> None:
	assert normalize.map_vertical_text("A B　C") == "Ａ Ｂ　Ｃ"


#============================================
def test_map_vertical_text_hides_spaces_from_normalizer() -> None:
	seen: list[str] = []

	def _record(text: str) -> str:
		seen.append(text)
		return text.upper()

	assert normalize.map_vertical_text("a b", _record) == "A B"
	assert " " not in seen[0]
