"""The workbook style table: fonts, fills, borders, cell and differential formats."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import BinaryIO, Hashable

from .cellformat import (
    BorderStyle,
    CellFormat,
    DiagonalBorderType,
    FillPattern,
    FontScript,
    FontUnderline,
    HorizontalAlignment,
    VerticalAlignment,
)
from .color import Rgba, XlsxColor, from_argb_string, to_argb_string

SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"

FIRST_CUSTOM_NUM_FMT_ID = 176

BUILTIN_NUM_FMTS: dict[str, int] = {
    "General": 0,
    "0": 1,
    "0.00": 2,
    "#,##0": 3,
    "#,##0.00": 4,
    "0%": 9,
    "0.00%": 10,
    "0.00E+00": 11,
    "# ?/?": 12,
    "# ??/??": 13,
    "m/d/yy": 14,
    "d-mmm-yy": 15,
    "d-mmm": 16,
    "mmm-yy": 17,
    "h:mm AM/PM": 18,
    "h:mm:ss AM/PM": 19,
    "h:mm": 20,
    "h:mm:ss": 21,
    "m/d/yy h:mm": 22,
    "(#,##0_);(#,##0)": 37,
    "(#,##0_);[Red](#,##0)": 38,
    "(#,##0.00_);(#,##0.00)": 39,
    "(#,##0.00_);[Red](#,##0.00)": 40,
    "mm:ss": 45,
    "[h]:mm:ss": 46,
    "mm:ss.0": 47,
    "##0.0E+0": 48,
    "@": 49,
}

_BUILTIN_NUM_FMTS_BY_ID = {fmt_id: code for code, fmt_id in BUILTIN_NUM_FMTS.items()}

DEFAULT_INDEXED_COLORS = (
    "000000", "FFFFFF", "FF0000", "00FF00", "0000FF", "FFFF00", "FF00FF", "00FFFF",
    "000000", "FFFFFF", "FF0000", "00FF00", "0000FF", "FFFF00", "FF00FF", "00FFFF",
    "800000", "008000", "000080", "808000", "800080", "008080", "C0C0C0", "808080",
    "9999FF", "993366", "FFFFCC", "CCFFFF", "660066", "FF8080", "0066CC", "CCCCFF",
    "000080", "FF00FF", "FFFF00", "00FFFF", "800080", "800000", "008080", "0000FF",
    "00CCFF", "CCFFFF", "CCFFCC", "FFFF99", "99CCFF", "FF99CC", "CC99FF", "FFCC99",
    "3366FF", "33CCCC", "99CC00", "FFCC00", "FF9900", "FF6600", "666699", "969696",
    "003366", "339966", "003300", "333300", "993300", "993366", "333399", "333333",
)

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'


class Styles:
    """Registry of the formats used by a workbook, written as styles.xml.

    A table created from scratch holds the default format and the two fills
    Excel requires; one meant to be filled from an existing file starts empty.
    """

    def __init__(self, new_from_scratch: bool = True) -> None:
        self.fonts: list[CellFormat] = []
        self.fonts_by_key: dict[Hashable, CellFormat] = {}
        self.fills: list[CellFormat] = []
        self.fills_by_key: dict[Hashable, CellFormat] = {}
        self.borders: list[CellFormat] = []
        self.borders_by_key: dict[Hashable, CellFormat] = {}
        self.xf_formats: list[CellFormat] = []
        self.xf_formats_by_key: dict[Hashable, CellFormat] = {}
        self.dxf_formats: list[CellFormat] = []
        self.dxf_formats_by_key: dict[Hashable, CellFormat] = {}

        self.custom_num_fmt_ids: dict[int, str] = {}
        self.custom_num_fmt_codes: dict[str, int] = {}
        self.next_custom_num_fmt_id = FIRST_CUSTOM_NUM_FMT_ID

        self.indexed_colors: list[Rgba] = []
        self.is_indexed_colors_default = True
        self.empty_format_added = False

        if new_from_scratch:
            self.add_xf_format(CellFormat())
            gray_fill = CellFormat(fill_pattern=FillPattern.GRAY125)
            self.fills.append(gray_fill)
            self.fills_by_key[gray_fill.fill_key()] = gray_fill

    # -- lookup ---------------------------------------------------------

    def xf_format(self, idx: int) -> CellFormat:
        """The cell format at *idx*, or an empty format when out of range."""
        if 0 <= idx < len(self.xf_formats):
            return self.xf_formats[idx]
        return CellFormat()

    def dxf_format(self, idx: int) -> CellFormat:
        """The differential format at *idx*, or an empty format when out of range."""
        if 0 <= idx < len(self.dxf_formats):
            return self.dxf_formats[idx]
        return CellFormat()

    def color_by_index(self, idx: int) -> Rgba | None:
        """The palette colour at *idx*; the default palette is used if none is set."""
        if not self.indexed_colors:
            self.indexed_colors = [from_argb_string(c) for c in DEFAULT_INDEXED_COLORS]
            self.is_indexed_colors_default = True
        if 0 <= idx < len(self.indexed_colors):
            return self.indexed_colors[idx]
        return None

    # -- registration ---------------------------------------------------

    def register_custom_num_fmt(self, fmt_id: int, code: str) -> None:
        """Record a custom number format under *fmt_id*."""
        self.custom_num_fmt_ids[fmt_id] = code
        self.custom_num_fmt_codes[code] = fmt_id

    def fix_num_fmt(self, fmt: CellFormat) -> None:
        """Give *fmt* both a number format id and a format code."""
        if not fmt.has_num_fmt_data():
            return
        if fmt.num_fmt_id is not None and fmt.number_format:
            return

        code = fmt.number_format
        if code:
            if code in BUILTIN_NUM_FMTS:
                fmt.num_fmt_id = BUILTIN_NUM_FMTS[code]
            elif code in self.custom_num_fmt_codes:
                fmt.num_fmt_id = self.custom_num_fmt_codes[code]
            else:
                fmt.num_fmt_id = self.next_custom_num_fmt_id
                self.register_custom_num_fmt(self.next_custom_num_fmt_id, code)
                self.next_custom_num_fmt_id += 1
            return

        fmt_id = fmt.num_fmt_id or 0
        if fmt_id in self.custom_num_fmt_ids:
            code = self.custom_num_fmt_ids[fmt_id]
        else:
            code = _BUILTIN_NUM_FMTS_BY_ID.get(fmt_id, "General")
        fmt.num_fmt_id = fmt_id
        fmt.number_format = code

    def add_xf_format(self, fmt: CellFormat, force: bool = False) -> None:
        """Register a cell format, assigning its font, fill, border and xf indices.

        With *force* the format is appended even when an equal one exists,
        which keeps duplicates read from an existing file in place.
        """
        if fmt.is_empty():
            if self.empty_format_added and not force:
                return
            self.empty_format_added = True

        if fmt.has_num_fmt_data() and fmt.num_fmt_id is None:
            self.fix_num_fmt(fmt)

        font_key = fmt.font_key()
        if fmt.has_font_data() and fmt.font_index is None:
            known = self.fonts_by_key.get(font_key)
            fmt.font_index = len(self.fonts) if known is None else known.font_index
        if font_key not in self.fonts_by_key:
            self.fonts.append(fmt)
            self.fonts_by_key[font_key] = fmt

        fill_key = fmt.fill_key()
        if fmt.has_fill_data() and fmt.fill_index is None:
            known = self.fills_by_key.get(fill_key)
            fmt.fill_index = len(self.fills) if known is None else known.fill_index
        if fill_key not in self.fills_by_key:
            self.fills.append(fmt)
            self.fills_by_key[fill_key] = fmt

        border_key = fmt.border_key()
        if fmt.has_border_data() and fmt.border_index is None:
            known = self.borders_by_key.get(border_key)
            fmt.border_index = len(self.borders) if known is None else known.border_index
        if border_key not in self.borders_by_key:
            self.borders.append(fmt)
            self.borders_by_key[border_key] = fmt

        key = fmt.format_key()
        if not fmt.is_empty() and fmt.xf_index is None:
            known = self.xf_formats_by_key.get(key)
            fmt.xf_index = len(self.xf_formats) if known is None else known.xf_index
        if key not in self.xf_formats_by_key or force:
            self.xf_formats.append(fmt)
            self.xf_formats_by_key[key] = fmt

    def add_dxf_format(self, fmt: CellFormat, force: bool = False) -> None:
        """Register a differential (conditional) format and assign its dxf index."""
        if fmt.has_num_fmt_data():
            self.fix_num_fmt(fmt)

        key = fmt.format_key()
        if not fmt.is_empty() and fmt.dxf_index is None:
            known = self.dxf_formats_by_key.get(key)
            fmt.dxf_index = len(self.dxf_formats) if known is None else known.dxf_index
        if key not in self.dxf_formats_by_key or force:
            self.dxf_formats.append(fmt)
            self.dxf_formats_by_key[key] = fmt

    # -- writing --------------------------------------------------------

    def to_xml(self) -> bytes:
        """Serialize the table as the bytes of styles.xml."""
        root = ET.Element("styleSheet", {"xmlns": SPREADSHEET_NS})

        self._write_num_fmts(root)
        self._write_fonts(root)
        self._write_fills(root)
        self._write_borders(root)

        cell_style_xfs = ET.SubElement(root, "cellStyleXfs", {"count": "1"})
        ET.SubElement(
            cell_style_xfs,
            "xf",
            {"numFmtId": "0", "fontId": "0", "fillId": "0", "borderId": "0"},
        )

        self._write_cell_xfs(root)

        cell_styles = ET.SubElement(root, "cellStyles", {"count": "1"})
        ET.SubElement(cell_styles, "cellStyle", {"name": "Normal", "xfId": "0", "builtinId": "0"})

        self._write_dxfs(root)

        ET.SubElement(
            root,
            "tableStyles",
            {
                "count": "0",
                "defaultTableStyle": "TableStyleMedium9",
                "defaultPivotStyle": "PivotStyleLight16",
            },
        )

        self._write_colors(root)

        body = ET.tostring(root, encoding="unicode")
        return (_XML_DECLARATION + body).encode("utf-8")

    def save_to_xml_file(self, stream: BinaryIO) -> None:
        """Write styles.xml to a binary *stream*."""
        stream.write(self.to_xml())

    def _write_num_fmts(self, root: ET.Element) -> None:
        if not self.custom_num_fmt_ids:
            return
        num_fmts = ET.SubElement(root, "numFmts", {"count": str(len(self.custom_num_fmt_ids))})
        for fmt_id in sorted(self.custom_num_fmt_ids):
            ET.SubElement(
                num_fmts,
                "numFmt",
                {"numFmtId": str(fmt_id), "formatCode": self.custom_num_fmt_ids[fmt_id]},
            )

    def _write_fonts(self, root: ET.Element) -> None:
        fonts = ET.SubElement(root, "fonts", {"count": str(len(self.fonts))})
        for fmt in self.fonts:
            _write_font(fonts, fmt, is_dxf=False)

    def _write_fills(self, root: ET.Element) -> None:
        fills = ET.SubElement(root, "fills", {"count": str(len(self.fills))})
        for fmt in self.fills:
            _write_fill(fills, fmt, is_dxf=False)

    def _write_borders(self, root: ET.Element) -> None:
        borders = ET.SubElement(root, "borders", {"count": str(len(self.borders))})
        for fmt in self.borders:
            _write_border(borders, fmt, is_dxf=False)

    def _write_cell_xfs(self, root: ET.Element) -> None:
        cell_xfs = ET.SubElement(root, "cellXfs", {"count": str(len(self.xf_formats))})
        for fmt in self.xf_formats:
            xf = ET.SubElement(
                cell_xfs,
                "xf",
                {
                    "numFmtId": str(fmt.num_fmt_id or 0),
                    "fontId": str(fmt.font_index or 0),
                    "fillId": str(fmt.fill_index or 0),
                    "borderId": str(fmt.border_index or 0),
                    "xfId": "0",
                },
            )
            if fmt.has_num_fmt_data():
                xf.set("applyNumberFormat", "1")
            if fmt.has_font_data():
                xf.set("applyFont", "1")
            if fmt.has_fill_data():
                xf.set("applyFill", "1")
            if fmt.has_border_data():
                xf.set("applyBorder", "1")
            if fmt.has_alignment_data():
                xf.set("applyAlignment", "1")
                _write_alignment(xf, fmt)

    def _write_dxfs(self, root: ET.Element) -> None:
        dxfs = ET.SubElement(root, "dxfs", {"count": str(len(self.dxf_formats))})
        for fmt in self.dxf_formats:
            dxf = ET.SubElement(dxfs, "dxf")
            if fmt.has_font_data():
                _write_font(dxf, fmt, is_dxf=True)
            if fmt.has_num_fmt_data():
                ET.SubElement(
                    dxf,
                    "numFmt",
                    {
                        "numFmtId": str(fmt.num_fmt_id or 0),
                        "formatCode": fmt.number_format or "",
                    },
                )
            if fmt.has_fill_data():
                _write_fill(dxf, fmt, is_dxf=True)
            if fmt.has_border_data():
                _write_border(dxf, fmt, is_dxf=True)

    def _write_colors(self, root: ET.Element) -> None:
        if self.is_indexed_colors_default:
            return
        colors = ET.SubElement(root, "colors")
        indexed = ET.SubElement(colors, "indexedColors")
        for color in self.indexed_colors:
            ET.SubElement(indexed, "rgbColor", {"rgb": to_argb_string(color)})


def _write_font(parent: ET.Element, fmt: CellFormat, is_dxf: bool) -> None:
    font = ET.SubElement(parent, "font")

    # condense and extend mostly appear in dxf formats
    if fmt.font_condense is not None and not fmt.font_condense:
        ET.SubElement(font, "condense", {"val": "0"})
    if fmt.font_extend is not None and not fmt.font_extend:
        ET.SubElement(font, "extend", {"val": "0"})

    if fmt.font_bold:
        ET.SubElement(font, "b")
    if fmt.font_italic:
        ET.SubElement(font, "i")
    if fmt.font_strike_out:
        ET.SubElement(font, "strike")
    if fmt.font_outline:
        ET.SubElement(font, "outline")
    if fmt.font_shadow:
        ET.SubElement(font, "shadow")

    underline = fmt.font_underline
    if underline is not None and underline is not FontUnderline.NONE:
        u = ET.SubElement(font, "u")
        if underline is not FontUnderline.SINGLE:
            u.set("val", underline.value)

    script = fmt.font_script
    if script is not None and script is not FontScript.NORMAL:
        ET.SubElement(font, "vertAlign", {"val": script.value})

    if not is_dxf and fmt.font_size is not None:
        ET.SubElement(font, "sz", {"val": str(fmt.font_size)})

    if fmt.font_color is not None:
        fmt.font_color.save_to_xml(font)

    if not is_dxf:
        if fmt.font_name:
            ET.SubElement(font, "name", {"val": fmt.font_name})
        if fmt.font_charset is not None:
            ET.SubElement(font, "charset", {"val": str(fmt.font_charset)})
        if fmt.font_family is not None:
            ET.SubElement(font, "family", {"val": str(fmt.font_family)})
        if fmt.font_scheme is not None:
            ET.SubElement(font, "scheme", {"val": fmt.font_scheme})


def _write_fill(parent: ET.Element, fmt: CellFormat, is_dxf: bool) -> None:
    fill = ET.SubElement(parent, "fill")
    pattern_fill = ET.SubElement(fill, "patternFill")
    pattern = fmt.fill_pattern or FillPattern.NONE
    # Excel writes the default "none" for normal fills but omits it in dxfs.
    if not (pattern is FillPattern.NONE and is_dxf):
        pattern_fill.set("patternType", pattern.value)

    # For a solid fill Excel swaps the roles of foreground and background.
    if pattern is FillPattern.SOLID:
        pairs = ((fmt.fill_bg_color, "fgColor"), (fmt.fill_fg_color, "bgColor"))
    else:
        pairs = ((fmt.fill_fg_color, "fgColor"), (fmt.fill_bg_color, "bgColor"))
    for color, node in pairs:
        if color is not None:
            color.save_to_xml(pattern_fill, node)


def _write_border(parent: ET.Element, fmt: CellFormat, is_dxf: bool) -> None:
    border = ET.SubElement(parent, "border")
    diagonal = fmt.diagonal_border_type
    if diagonal in (DiagonalBorderType.UP, DiagonalBorderType.BOTH):
        border.set("diagonalUp", "1")
    if diagonal in (DiagonalBorderType.DOWN, DiagonalBorderType.BOTH):
        border.set("diagonalDown", "1")

    sides = [
        ("left", fmt.left_border_style, fmt.left_border_color),
        ("right", fmt.right_border_style, fmt.right_border_color),
        ("top", fmt.top_border_style, fmt.top_border_color),
        ("bottom", fmt.bottom_border_style, fmt.bottom_border_color),
    ]
    # Differential formats do not allow a diagonal style.
    if not is_dxf:
        sides.append(("diagonal", fmt.diagonal_border_style, fmt.diagonal_border_color))

    for name, style, color in sides:
        _write_sub_border(border, name, style, color)


def _write_sub_border(
    parent: ET.Element, name: str, style: BorderStyle | None, color: XlsxColor | None
) -> None:
    if style is None or style is BorderStyle.NONE:
        ET.SubElement(parent, name)
        return
    element = ET.SubElement(parent, name, {"style": style.value})
    (color or XlsxColor()).save_to_xml(element)


def _write_alignment(xf: ET.Element, fmt: CellFormat) -> None:
    alignment = ET.SubElement(xf, "alignment")
    horizontal = fmt.horizontal_alignment
    if horizontal is not None and horizontal is not HorizontalAlignment.GENERAL:
        alignment.set("horizontal", horizontal.value)
    vertical = fmt.vertical_alignment
    if vertical is not None and vertical is not VerticalAlignment.BOTTOM:
        alignment.set("vertical", vertical.value)
    if fmt.indent is not None:
        alignment.set("indent", str(fmt.indent))
    if fmt.text_wrap:
        alignment.set("wrapText", "1")
    if fmt.shrink_to_fit:
        alignment.set("shrinkToFit", "1")
    if fmt.rotation is not None:
        alignment.set("textRotation", str(fmt.rotation))