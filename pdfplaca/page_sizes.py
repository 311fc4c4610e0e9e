"""
Named page sizes in millimeters.
"""

# Standard Library
import math


# Name -> (width, height) in millimeters.
PAGE_SIZES_MM = {
	"A0": (1189.0, 841.0),
	"A1": (841.0, 594.0),
	"A2": (594.0, 420.0),
	"A3": (420.0, 297.0),
	"A4": (297.0, 210.0),
	"A5": (210.0, 148.0),
	"A6": (148.0, 105.0),
	"A7": (105.0, 74.0),
	"A8": (74.0, 52.0),
	"A9": (52.0, 37.0),
	"A10": (37.0, 26.0),
	"B0": (1456.0, 1030.0),
	"B1": (1030.0, 728.0),
	"B2": (728.0, 515.0),
	"B3": (515.0, 364.0),
	"B4": (364.0, 257.0),
	"B5": (257.0, 182.0),
	"B6": (182.0, 128.0),
	"B7": (128.0, 91.0),
	"B8": (91.0, 64.0),
	"B9": (64.0, 45.0),
	"B10": (45.0, 32.0),
	"Letter": (279.0, 216.0),
	"Legal": (356.0, 216.0),
	"Tabloid": (432.0, 279.0),
	"Ledger": (279.0, 432.0),
	"Junior Legal": (127.0, 203.0),
	"Half Letter": (140.0, 216.0),
	"Government Letter": (203.0, 267.0),
	"Government Legal": (216.0, 330.0),
	"ANSI A": (216.0, 279.0),
	"ANSI B": (279.0, 432.0),
	"ANSI C": (432.0, 559.0),
	"ANSI D": (559.0, 864.0),
	"ANSI E": (864.0, 1118.0),
	"Arch A": (229.0, 305.0),
	"Arch B": (305.0, 457.0),
	"Arch C": (457.0, 610.0),
	"Arch D": (610.0, 914.0),
	"Arch E": (914.0, 1219.0),
	"Arch E1": (762.0, 1067.0),
	"Arch E2": (660.0, 965.0),
	"Arch E3": (686.0, 991.0),
}
_LOOKUP = {name.lower(): size for name, size in PAGE_SIZES_MM.items()}

PORTRAIT = "portrait"
LANDSCAPE = "landscape"
ORIENTATIONS = (PORTRAIT, LANDSCAPE)


#============================================
def parse_page_size(value: str) -> tuple[float, float] | None:
	"""
	Parse a page size name or a WxH size in millimeters.

	Args:
		value: Name like "A4" (any case) or "100x150".

	Returns:
		Tuple of (width, height) in millimeters, or None if invalid.
	"""
	text = value.strip()
	size = _LOOKUP.get(text.lower())
	if size is not None:
		return size
	parts = text.lower().split("x")
	if len(parts) != 2:
		return None
	try:
		width = float(parts[0])
		height = float(parts[1])
	except ValueError:
		return None
	if not (math.isfinite(width) and math.isfinite(height)):
		return None
	if width <= 0 or height <= 0:
		return None
	return (width, height)


#============================================
def orient_page(width: float, height: float, orientation: str) -> tuple[float, float]:
	"""
	Swap page dimensions so they match an orientation.

	Args:
		width: Page width.
		height: Page height.
		orientation: "portrait" or "landscape".

	Returns:
		Tuple of (width, height).
	"""
	if orientation == PORTRAIT:
		if width > height:
			return (height, width)
		return (width, height)
	if orientation == LANDSCAPE:
		if width < height:
			return (height, width)
		return (width, height)
	raise ValueError(f"Unknown orientation: {orientation}")
