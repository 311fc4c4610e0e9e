"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import dataclasses
import os
import sys

# PIP3 modules
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

import pdfplaca.config
import pdfplaca.metrics


FAKE_FONTS = ("FakeMono", "FakeProp", "FakeCJK")


class FakeMetrics(pdfplaca.metrics.MetricsProvider):
	"""
	Deterministic metrics proportional to the font size.

	FakeMono: every glyph advances 0.6 em.
	FakeProp: "i" advances 0.3 em, "w" 0.9 em, others 0.6 em.
	FakeCJK: ASCII advances 0.5 em, CJK glyphs 1.0 em with 0.9 em ink.
	Latin fonts have no glyphs at or above U+2E80.
	"""

	def has_font(self, font_name: str) -> bool:
		return font_name in FAKE_FONTS

	def char_extents(self, font_name: str, size: float, char: str) -> pdfplaca.metrics.TextExtents:
		if font_name not in FAKE_FONTS:
			raise ValueError(f"Unknown font: {font_name}")
		wide = ord(char) >= 0x2E80
		if char == "　":
			return dataclasses.replace(pdfplaca.metrics.EMPTY_EXTENTS, x_advance=size)
		if char.isspace():
			return dataclasses.replace(pdfplaca.metrics.EMPTY_EXTENTS, x_advance=size * 0.5)
		if wide and font_name != "FakeCJK":
			return pdfplaca.metrics.EMPTY_EXTENTS
		if wide:
			return pdfplaca.metrics.TextExtents(
				x_bearing=size * 0.05,
				y_bearing=-size * 0.8,
				width=size * 0.9,
				height=size * 0.9,
				x_advance=size,
			)
		advance = size * 0.6
		if font_name == "FakeProp" and char == "i":
			advance = size * 0.3
		elif font_name == "FakeProp" and char == "w":
			advance = size * 0.9
		elif font_name == "FakeCJK":
			advance = size * 0.5
		return pdfplaca.metrics.TextExtents(
			x_bearing=size * 0.05,
			y_bearing=-size * 0.7,
			width=advance - size * 0.1,
			height=size * 0.7,
			x_advance=advance,
		)

	def font_extents(self, font_name: str, size: float) -> pdfplaca.metrics.FontExtents:
		if font_name not in FAKE_FONTS:
			raise ValueError(f"Unknown font: {font_name}")
		return pdfplaca.metrics.FontExtents(ascent=size * 0.8, descent=size * 0.2, height=size)


#============================================
@pytest.fixture
def fake_metrics() -> FakeMetrics:
	return FakeMetrics()


#============================================
@pytest.fixture
def page_geometry() -> pdfplaca.config.PageGeometry:
	"""
	A 600 x 400 point page with a 10 point margin.
	"""
	return pdfplaca.config.build_page_geometry(600.0, 400.0, 10.0)


#============================================
@pytest.fixture
def make_config(page_geometry):
	"""
	Build a PlacardConfig with test defaults.
	"""
	def _make_config(text: str, **kwargs) -> pdfplaca.config.PlacardConfig:
		kwargs.setdefault("font_name", "FakeMono")
		return pdfplaca.config.PlacardConfig(text=text, geometry=page_geometry, **kwargs)
	return _make_config
