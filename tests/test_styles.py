import io
import xml.etree.ElementTree as ET

import pytest

from xlsxbook.cellformat import (
    BorderStyle,
    CellFormat,
    DiagonalBorderType,
    FillPattern,
    FontScript,
    FontUnderline,
    HorizontalAlignment,
)
from xlsxbook.color import XlsxColor
from xlsxbook.styles import SPREADSHEET_NS, Styles

NS = "{" + SPREADSHEET_NS + "}"


@pytest.fixture
def styles():
    return Styles()


def parse(styles):
    return ET.fromstring(styles.to_xml())


def test_new_table_has_default_format_and_two_fills(styles):
    assert len(styles.xf_formats) == 1
    assert styles.xf_format(0).is_empty()
    assert [f.fill_pattern for f in styles.fills] == [None, FillPattern.GRAY125]
    assert len(styles.fonts) == 1
    assert len(styles.borders) == 1


def test_loaded_table_starts_empty():
    empty = Styles(new_from_scratch=False)
    assert empty.xf_formats == []
    assert empty.fills == []


def test_out_of_range_lookups_give_empty_formats(styles):
    assert styles.xf_format(-1) == CellFormat()
    assert styles.xf_format(50) == CellFormat()
    assert styles.dxf_format(0) == CellFormat()


def test_empty_format_added_only_once_unless_forced(styles):
    styles.add_xf_format(CellFormat())
    assert len(styles.xf_formats) == 1
    styles.add_xf_format(CellFormat(), force=True)
    assert len(styles.xf_formats) == 2


def test_builtin_number_format_gets_builtin_id(styles):
    fmt = CellFormat(number_format="0.00")
    styles.fix_num_fmt(fmt)
    assert fmt.num_fmt_id == 2
    assert styles.custom_num_fmt_ids == {}


def test_custom_number_formats_are_numbered_from_176(styles):
    first = CellFormat(number_format="yyyy-mm-dd")
    second = CellFormat(number_format="0.000")
    again = CellFormat(number_format="yyyy-mm-dd")
    for fmt in (first, second, again):
        styles.fix_num_fmt(fmt)
    assert first.num_fmt_id == 176
    assert second.num_fmt_id == first.num_fmt_id + 1
    assert again.num_fmt_id == first.num_fmt_id
    assert styles.custom_num_fmt_ids[first.num_fmt_id] == "yyyy-mm-dd"


def test_number_format_id_is_given_its_code(styles):
    fmt = CellFormat(num_fmt_id=14)
    styles.fix_num_fmt(fmt)
    assert fmt.number_format == "m/d/yy"


def test_unknown_number_format_id_falls_back_to_general(styles):
    fmt = CellFormat(num_fmt_id=999)
    styles.fix_num_fmt(fmt)
    assert fmt.number_format == "General"
    assert fmt.num_fmt_id == 999


def test_custom_id_resolves_to_registered_code(styles):
    styles.register_custom_num_fmt(200, "0.0%")
    fmt = CellFormat(num_fmt_id=200)
    styles.fix_num_fmt(fmt)
    assert fmt.number_format == "0.0%"


def test_equal_formats_share_indices(styles):
    a = CellFormat(font_bold=True)
    b = CellFormat(font_bold=True)
    styles.add_xf_format(a)
    styles.add_xf_format(b)
    assert a.xf_index == b.xf_index == 1
    assert a.font_index == b.font_index == 1
    assert len(styles.xf_formats) == 2
    assert styles.xf_format(1) is a


def test_different_fonts_get_new_font_entries(styles):
    bold = CellFormat(font_bold=True)
    italic = CellFormat(font_italic=True)
    styles.add_xf_format(bold)
    styles.add_xf_format(italic)
    assert italic.font_index == bold.font_index + 1
    assert len(styles.fonts) == 3
    # the fill is default for both, so no fill entry is added
    assert len(styles.fills) == 2


def test_fill_matching_existing_entry_reuses_it(styles):
    fmt = CellFormat(fill_pattern=FillPattern.SOLID, fill_fg_color=XlsxColor.from_rgb("FFFF0000"))
    styles.add_xf_format(fmt)
    assert fmt.fill_index == 2
    same = CellFormat(fill_pattern=FillPattern.SOLID, fill_fg_color=XlsxColor.from_rgb("FFFF0000"),
                      font_bold=True)
    styles.add_xf_format(same)
    assert same.fill_index == fmt.fill_index


def test_dxf_formats_are_deduplicated(styles):
    a = CellFormat(font_bold=True)
    b = CellFormat(font_bold=True)
    styles.add_dxf_format(a)
    styles.add_dxf_format(b)
    assert a.dxf_index == b.dxf_index == 0
    assert len(styles.dxf_formats) == 1
    styles.add_dxf_format(CellFormat(font_bold=True), force=True)
    assert len(styles.dxf_formats) == 2


def test_default_palette(styles):
    assert styles.color_by_index(2) == (255, 0, 0, 255)
    assert styles.color_by_index(64) is None
    assert styles.color_by_index(-1) is None
    assert styles.is_indexed_colors_default


def test_xml_structure_of_new_table(styles):
    root = parse(styles)
    assert root.tag == NS + "styleSheet"
    assert root.find(NS + "numFmts") is None
    assert root.find(NS + "fonts").get("count") == str(len(styles.fonts))
    patterns = [p.get("patternType") for p in root.iter(NS + "patternFill")]
    assert patterns == ["none", "gray125"]
    table_styles = root.find(NS + "tableStyles")
    assert table_styles.get("defaultTableStyle") == "TableStyleMedium9"
    assert root.find(NS + "cellStyles/" + NS + "cellStyle").get("name") == "Normal"
    assert root.find(NS + "colors") is None


def test_xml_starts_with_declaration(styles):
    assert styles.to_xml().startswith(b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>')


def test_custom_num_fmts_are_written(styles):
    styles.add_xf_format(CellFormat(number_format="yyyy-mm-dd"))
    root = parse(styles)
    num_fmt = root.find(NS + "numFmts/" + NS + "numFmt")
    assert num_fmt.get("numFmtId") == "176"
    assert num_fmt.get("formatCode") == "yyyy-mm-dd"
    xf = root.findall(NS + "cellXfs/" + NS + "xf")[-1]
    assert xf.get("numFmtId") == "176"
    assert xf.get("applyNumberFormat") == "1"


def test_font_elements_are_written(styles):
    fmt = CellFormat(
        font_bold=True,
        font_underline=FontUnderline.DOUBLE,
        font_script=FontScript.SUPER,
        font_size=11,
        font_name="Calibri",
    )
    styles.add_xf_format(fmt)
    font = parse(styles).findall(NS + "fonts/" + NS + "font")[fmt.font_index]
    tags = [child.tag[len(NS):] for child in font]
    assert tags == ["b", "u", "vertAlign", "sz", "name"]
    assert font.find(NS + "u").get("val") == "double"
    assert font.find(NS + "vertAlign").get("val") == "superscript"
    assert font.find(NS + "name").get("val") == "Calibri"


def test_solid_fill_swaps_colours(styles):
    fmt = CellFormat(fill_pattern=FillPattern.SOLID, fill_bg_color=XlsxColor.from_rgb("FF00FF00"))
    styles.add_xf_format(fmt)
    pattern_fill = parse(styles).findall(NS + "fills/" + NS + "fill")[fmt.fill_index][0]
    assert pattern_fill.get("patternType") == "solid"
    assert pattern_fill.find(NS + "fgColor").get("rgb") == "FF00FF00"
    assert pattern_fill.find(NS + "bgColor") is None


def test_border_is_written(styles):
    fmt = CellFormat(
        left_border_style=BorderStyle.THIN,
        diagonal_border_type=DiagonalBorderType.BOTH,
    )
    styles.add_xf_format(fmt)
    border = parse(styles).findall(NS + "borders/" + NS + "border")[fmt.border_index]
    assert border.get("diagonalUp") == "1"
    assert border.get("diagonalDown") == "1"
    left = border.find(NS + "left")
    assert left.get("style") == "thin"
    assert left.find(NS + "color").get("auto") == "1"
    assert border.find(NS + "right").attrib == {}
    assert border.find(NS + "diagonal") is not None and len(border) == 5


def test_alignment_is_written(styles):
    fmt = CellFormat(horizontal_alignment=HorizontalAlignment.MERGE, text_wrap=True, indent=2)
    styles.add_xf_format(fmt)
    xf = parse(styles).findall(NS + "cellXfs/" + NS + "xf")[fmt.xf_index]
    assert xf.get("applyAlignment") == "1"
    alignment = xf.find(NS + "alignment")
    assert alignment.get("horizontal") == "centerContinuous"
    assert alignment.get("wrapText") == "1"
    assert alignment.get("indent") == "2"


def test_dxf_omits_font_size_and_none_pattern(styles):
    fmt = CellFormat(font_bold=True, font_size=14, fill_pattern=FillPattern.NONE,
                     left_border_style=BorderStyle.THICK)
    styles.add_dxf_format(fmt)
    dxf = parse(styles).find(NS + "dxfs/" + NS + "dxf")
    assert dxf.find(NS + "font/" + NS + "sz") is None
    assert dxf.find(NS + "font/" + NS + "b") is not None
    assert dxf.find(NS + "fill/" + NS + "patternFill").get("patternType") is None
    assert dxf.find(NS + "border/" + NS + "diagonal") is None


def test_custom_palette_is_written(styles):
    styles.indexed_colors = [(1, 2, 3, 255)]
    styles.is_indexed_colors_default = False
    rgb = parse(styles).find(NS + "colors/" + NS + "indexedColors/" + NS + "rgbColor")
    assert rgb.get("rgb") == "FF010203"
    assert styles.color_by_index(0) == (1, 2, 3, 255)


def test_save_to_stream_matches_to_xml(styles):
    styles.add_xf_format(CellFormat(font_italic=True))
    stream = io.BytesIO()
    styles.save_to_xml_file(stream)
    assert stream.getvalue() == styles.to_xml()