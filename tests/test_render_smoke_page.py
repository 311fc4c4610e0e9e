import pathlib

import fitz
import PIL.Image
import pypdf

import pdfplaca.config
import pdfplaca.metrics
import pdfplaca.render


DPI = 144
INK_THRESHOLD = 200
EDGE_RATIO_LIMIT = 0.001


#============================================
def _build_config(text: str, **kwargs) -> pdfplaca.config.PlacardConfig:
	"""
	Build a landscape A5 placard config.
	"""
	page_width = pdfplaca.config.mm_to_points(210.0)
	page_height = pdfplaca.config.mm_to_points(148.0)
	margin = pdfplaca.config.mm_to_points(8.0)
	geometry = pdfplaca.config.build_page_geometry(page_width, page_height, margin)
	return pdfplaca.config.PlacardConfig(text=text, geometry=geometry, **kwargs)


#============================================
def _render_pdf_page(path: pathlib.Path, index: int) -> PIL.Image.Image:
	"""
	Render one page of a PDF to an image.

	Args:
		path: PDF path.
		index: Page index.

	Returns:
		PIL image.
	"""
	document = fitz.open(path)
	page = document[index]
	scale = DPI / 72.0
	matrix = fitz.Matrix(scale, scale)
	pixmap = page.get_pixmap(matrix=matrix, alpha=False)
	image = PIL.Image.frombytes("RGB", [pixmap.width, pixmap.height], pixmap.samples)
	document.close()
	return image


#============================================
def _count_ink_ratio(gray: PIL.Image.Image, threshold: int) -> float:
	pixels = list(gray.getdata())
	if not pixels:
		return 0.0
	ink = sum(1 for value in pixels if value < threshold)
	return ink / len(pixels)


#============================================
def test_render_single_page(tmp_path: pathlib.Path) -> None:
	output_pdf = tmp_path / "single.pdf"
	config = _build_config("HELLO\\nWORLD")
	provider = pdfplaca.metrics.build_metrics_provider()
	result = pdfplaca.render.render_placard(config, provider, output_pdf)
	assert result.pages == 1
	assert result.rows == 2
	assert result.failed_rows == 0
	assert result.font_name == "Helvetica"
	reader = pypdf.PdfReader(str(output_pdf))
	assert len(reader.pages) == 1
	box = reader.pages[0].mediabox
	assert float(box.width) > float(box.height)


#============================================
def test_render_letters_per_page(tmp_path: pathlib.Path) -> None:
	output_pdf = tmp_path / "paged.pdf"
	config = _build_config("ABC DEF G", letters_per_page=3)
	provider = pdfplaca.metrics.build_metrics_provider()
	result = pdfplaca.render.render_placard(config, provider, output_pdf)
	assert result.pages == 3
	reader = pypdf.PdfReader(str(output_pdf))
	assert len(reader.pages) == 3


#============================================
def test_render_vertical_cid_font(tmp_path: pathlib.Path) -> None:
	output_pdf = tmp_path / "vertical.pdf"
	config = _build_config("日本語「テスト」ー", font_name="HeiseiMin-W3", vertical=True)
	provider = pdfplaca.metrics.build_metrics_provider()
	result = pdfplaca.render.render_placard(config, provider, output_pdf)
	assert result.pages == 1
	assert result.font_name == "HeiseiMin-W3"
	reader = pypdf.PdfReader(str(output_pdf))
	assert len(reader.pages) == 1


#============================================
def test_rendered_page_margins_stay_blank(tmp_path: pathlib.Path) -> None:
	"""
	Text and background bands stay inside the page margins.
	"""
	output_pdf = tmp_path / "margins.pdf"
	config = _build_config("MARGIN\\nTEST", back_color=0x000000, text_color=0xFFFFFF)
	provider = pdfplaca.metrics.build_metrics_provider()
	pdfplaca.render.render_placard(config, provider, output_pdf)

	image = _render_pdf_page(output_pdf, 0)
	gray = image.convert("L")
	scale = DPI / 72.0
	strip = max(2, int(round(config.geometry.margin * scale * 0.5)))
	width, height = gray.size
	violations = []
	for edge_name, edge in (
		("left", gray.crop((0, 0, strip, height))),
		("right", gray.crop((width - strip, 0, width, height))),
		("top", gray.crop((0, 0, width, strip))),
		("bottom", gray.crop((0, height - strip, width, height))),
	):
		ratio = _count_ink_ratio(edge, INK_THRESHOLD)
		if ratio > EDGE_RATIO_LIMIT:
			violations.append(f"edge {edge_name} ratio {ratio:.3f}")

	center = gray.crop((width // 4, height // 4, 3 * width // 4, 3 * height // 4))
	assert _count_ink_ratio(center, INK_THRESHOLD) > 0.2
	if violations:
		message = "Ink detected in page margins:\n"
		message += "\n".join(violations)
		raise AssertionError(message)
