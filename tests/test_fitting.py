import pytest

import pdfplaca.config
import pdfplaca.fitting as fitting
import pdfplaca.utf8_lib


#============================================
def _row_ratio(fake_metrics, font: str, text: str, fit) -> float:
	chars = pdfplaca.utf8_lib.split_chars(text)
	width, height = fitting.measure_horizontal(fake_metrics, font, fit.font_size, chars)
	per_char = width * fit.scale_x / len(chars)
	return max(per_char / (height * fit.scale_y), (height * fit.scale_y) / per_char)


#============================================
def test_measure_horizontal(fake_metrics) -> None:
	width, height = fitting.measure_horizontal(fake_metrics, "FakeMono", 10.0, ["A", "B"])
	assert width == pytest.approx(12.0)
	assert height == pytest.approx(10.0)


#============================================
def test_measure_vertical_categories(fake_metrics) -> None:
	"""
	Dashes stack by ink width, small kana by a reduced ink height.
	"""
	width, height = fitting.measure_vertical(fake_metrics, "FakeCJK", 10.0, ["日", "ー", "っ", "　"])
	assert width == pytest.approx(9.0)
	assert height == pytest.approx(9.0 + 9.0 + 9.0 * 0.55 + 10.0)


#============================================
def test_fit_horizontal_empty_text_fails(fake_metrics) -> None:
	assert fitting.fit_horizontal(fake_metrics, "FakeMono", "", 500.0, 100.0, 1.5) is None
	assert fitting.fit_vertical(fake_metrics, "FakeCJK", "", 100.0, 500.0, 1.5) is None


#============================================
def test_fit_horizontal_fills_box_within_threshold(fake_metrics) -> None:
	fit = fitting.fit_horizontal(fake_metrics, "FakeMono", "AB", 500.0, 100.0, 1.5)
	assert fit is not None
	assert fit.font_size > pdfplaca.config.INITIAL_FONT_SIZE
	assert fit.scale_x > 0
	assert fit.scale_y > 0
	chars = ["A", "B"]
	width, height = fitting.measure_horizontal(fake_metrics, "FakeMono", fit.font_size, chars)
	assert width * fit.scale_x <= 500.0
	assert height * fit.scale_y <= 100.0
	assert _row_ratio(fake_metrics, "FakeMono", "AB", fit) <= 1.5 + 1e-9


#============================================
def test_fit_horizontal_long_row_clamps_height(fake_metrics) -> None:
	"""
	A long row in a tall box is limited by the threshold, not the box height.
	"""
	text = "ABCDEFGHIJKLMNOPQRST"
	fit = fitting.fit_horizontal(fake_metrics, "FakeMono", text, 400.0, 300.0, 1.2)
	assert fit is not None
	assert _row_ratio(fake_metrics, "FakeMono", text, fit) <= 1.2 + 1e-9


#============================================
def test_fit_isotropic_below_threshold(fake_metrics) -> None:
	"""
	A threshold under 1.1 skips scale growth; only the final clamp applies.
	"""
	fit = fitting.fit_horizontal(fake_metrics, "FakeMono", "AB", 500.0, 100.0, 1.05)
	assert fit is not None
	assert fit.scale_x == 1.0
	# Each glyph is 0.6 em wide against a 1 em line, so height is clamped.
	assert fit.scale_y == pytest.approx(1.05 * 0.6)


#============================================
def test_fit_unmeasurable_text_fails(fake_metrics) -> None:
	assert fitting.fit_horizontal(fake_metrics, "FakeMono", "日本", 500.0, 100.0, 1.5) is None


#============================================
def test_fit_font_size_ceiling(fake_metrics) -> None:
	settings = pdfplaca.config.FitSettings(
		font_growth=1.1, scale_growth=1.1, box_fraction=0.9, font_size_ceiling=20.0,
	)
	fit = fitting.fit_horizontal(fake_metrics, "FakeMono", "A", 5000.0, 5000.0, 1.5, settings)
	assert fit is None


#============================================
def test_fit_vertical_column(fake_metrics) -> None:
	fit = fitting.fit_vertical(fake_metrics, "FakeCJK", "日本", 100.0, 500.0, 1.5)
	assert fit is not None
	width, height = fitting.measure_vertical(fake_metrics, "FakeCJK", fit.font_size, ["日", "本"])
	assert width * fit.scale_x <= 100.0
	assert height * fit.scale_y <= 500.0
	per_char = height * fit.scale_y / 2
	assert per_char / (width * fit.scale_x) <= 1.5 + 1e-9
	assert fit.scale_y == pytest.approx(1.5)
