import pytest

import pdfplaca.pages as pages


#============================================
def test_split_rows_on_newlines() -> None:
	assert pages.split_rows("AB\nCD\nEF") == ["AB", "CD", "EF"]
	assert pages.split_rows("AB\r\nCD") == ["AB", "CD"]


#============================================
def test_split_pages_unlimited_keeps_text() -> None:
	assert pages.split_pages("AB\nCD", -1) == ["AB\nCD"]


#============================================
def test_split_pages_chunks_after_stripping() -> None:
	assert pages.split_pages("AB CD\nEF", 2) == ["AB", "CD", "EF"]


#============================================
def test_split_pages_partial_last_page() -> None:
	result = pages.split_pages("ABCDEFGHIJ", 3)
	assert [len(page) for page in result] == [3, 3, 3, 1]


#============================================
def test_split_pages_counts_characters_not_bytes() -> None:
	assert pages.split_pages("日本語です", 2) == ["日本", "語で", "す"]


#============================================
def test_split_pages_only_whitespace() -> None:
	assert pages.split_pages(" 　\n", 4) == []


#============================================
@pytest.mark.parametrize("letters", [0, -2])
def test_split_pages_rejects_bad_limit(letters: int) -> None:
	with pytest.raises(ValueError):
		pages.split_pages("ABC", letters)


#============================================
def test_layout_horizontal_bands(fake_metrics, make_config) -> None:
	"""
	Rows are stacked top to bottom with a margin between bands.
	"""
	config = make_config("AB\nCD")
	layout = pages.layout_page(config, fake_metrics, "AB\nCD")
	assert len(layout.bands) == 2
	row_height = (400.0 - 10.0 * 3) / 2
	assert layout.bands[0].y == pytest.approx(10.0)
	assert layout.bands[1].y == pytest.approx(10.0 + row_height + 10.0)
	assert layout.bands[0].height == pytest.approx(row_height)
	assert layout.bands[0].width == pytest.approx(580.0)
	assert "".join(command.text for command in layout.glyphs) == "ABCD"
	assert layout.failed_rows == []
	assert all(size is not None for size in layout.font_size_by_row)


#============================================
def test_layout_vertical_columns_right_to_left(fake_metrics, make_config) -> None:
	config = make_config("日本\n語", font_name="FakeCJK", vertical=True)
	layout = pages.layout_page(config, fake_metrics, "日本\n語")
	column_width = (600.0 - 10.0 * 3) / 2
	first, second = layout.bands
	assert first.x == pytest.approx(600.0 - 10.0 - column_width)
	assert second.x == pytest.approx(10.0)
	assert first.x > second.x
	assert first.height == pytest.approx(380.0)


#============================================
def test_layout_vertical_widens_ascii_for_cjk_font(fake_metrics, make_config) -> None:
	config = make_config("AB", font_name="FakeCJK", vertical=True)
	layout = pages.layout_page(config, fake_metrics, "AB")
	assert [command.text for command in layout.glyphs] == ["Ａ", "Ｂ"]


#============================================
def test_layout_vertical_latin_font_not_widened(fake_metrics, make_config) -> None:
	config = make_config("AB", vertical=True)
	layout = pages.layout_page(config, fake_metrics, "AB")
	assert [command.text for command in layout.glyphs] == ["A", "B"]


#============================================
def test_layout_records_failed_rows(fake_metrics, make_config) -> None:
	"""
	A row the font cannot measure is skipped, an empty row is not a failure.
	"""
	config = make_config("A\n日本\n")
	layout = pages.layout_page(config, fake_metrics, "A\n日本\n")
	assert len(layout.bands) == 3
	assert layout.failed_rows == [1]
	assert layout.font_size_by_row[0] is not None
	assert layout.font_size_by_row[2] is None
	assert [command.text for command in layout.glyphs] == ["A"]
