import pathlib

import pytest

import pdfplaca.cli as cli
import pdfplaca.config


#============================================
def test_parse_args_defaults() -> None:
	args = cli.parse_args([])
	assert args.text == pdfplaca.config.DEFAULT_TEXT
	assert args.output_path == "output.pdf"
	assert args.page_size == (297.0, 210.0)
	assert args.orientation == "landscape"
	assert args.margin == 8.0
	assert args.threshold == 1.5
	assert args.letters_per_page == -1
	assert args.text_color == 0x000000
	assert args.back_color == 0xFFFFFF
	assert args.vertical is False


#============================================
@pytest.mark.parametrize(
	"argv",
	[
		["--margin", "0"],
		["--margin", "abc"],
		["--threshold", "0.5"],
		["--letters-per-page", "0"],
		["--letters-per-page", "-3"],
		["--page-size", "Z9"],
		["--text-color", "#12345"],
		["--back-color", "notacolor"],
		["--y-adjust", "nan"],
	],
)
def test_parse_args_rejects_invalid(argv: list[str]) -> None:
	with pytest.raises(SystemExit) as info:
		cli.parse_args(argv)
	assert info.value.code == 2


#============================================
def test_parse_color_forms() -> None:
	assert cli.parse_color("#FF8800") == 0xFF8800
	assert cli.parse_color("#f80") == 0xFF8800
	assert cli.parse_color("red") == 0xFF0000
	assert cli.parse_color("White") == 0xFFFFFF


#============================================
def test_build_config_portrait_geometry() -> None:
	args = cli.parse_args(["--portrait", "--margin", "10", "--y-adjust", "2"])
	config = cli.build_config(args)
	geometry = config.geometry
	assert geometry.page_width < geometry.page_height
	assert geometry.page_width == pytest.approx(210.0 * 72.0 / 25.4)
	assert geometry.margin == pytest.approx(10.0 * 72.0 / 25.4)
	assert config.y_adjust == pytest.approx(-2.0 * 72.0 / 25.4)


#============================================
def test_main_writes_pdf(tmp_path: pathlib.Path) -> None:
	output = tmp_path / "placard.pdf"
	code = cli.main(["--text", "HELLO\\nWORLD", "-o", str(output)])
	assert code == 0
	assert output.exists()
	assert output.read_bytes().startswith(b"%PDF")


#============================================
def test_main_unknown_font(tmp_path: pathlib.Path, capsys) -> None:
	code = cli.main(["--font", "NoSuchFont", "-o", str(tmp_path / "x.pdf")])
	assert code == 1
	assert "ERROR" in capsys.readouterr().out


#============================================
def test_main_bad_font_file(tmp_path: pathlib.Path, capsys) -> None:
	bad_font = tmp_path / "bad.ttf"
	bad_font.write_bytes(b"not a font")
	code = cli.main(["--font", "BadFont", "--font-file", str(bad_font), "-o", str(tmp_path / "x.pdf")])
	assert code == 1
	assert "ERROR" in capsys.readouterr().out


#============================================
def test_main_font_list(capsys) -> None:
	assert cli.main(["--font-list"]) == 0
	names = capsys.readouterr().out.split("\n")
	assert "Helvetica" in names
	assert "HeiseiMin-W3" in names


#============================================
def test_main_renders_undecodable_argv(tmp_path: pathlib.Path) -> None:
	"""
	Invalid UTF-8 in the text argument still renders a page.
	"""
	output = tmp_path / "bytes.pdf"
	text = b"AB\xffCD".decode("utf-8", "surrogateescape")
	code = cli.main(["--text", text, "-o", str(output)])
	assert code == 0
	assert output.read_bytes().startswith(b"%PDF")
