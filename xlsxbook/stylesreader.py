"""Reading styles.xml into a :class:`~xlsxbook.styles.Styles` table."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Iterator

from .cellformat import (
    BORDER_FIELDS,
    FILL_FIELDS,
    FONT_FIELDS,
    BorderStyle,
    CellFormat,
    DiagonalBorderType,
    FillPattern,
    FontScript,
    FontUnderline,
    HorizontalAlignment,
    VerticalAlignment,
)
from .color import XlsxColor, from_argb_string
from .styles import Styles
from .utility import parse_xsd_boolean

log = logging.getLogger(__name__)

_FONT_FLAGS = {
    "b": "font_bold",
    "i": "font_italic",
    "strike": "font_strike_out",
    "outline": "font_outline",
    "shadow": "font_shadow",
}

_FONT_INTS = {
    "charset": "font_charset",
    "family": "font_family",
    "condense": "font_condense",
    "extend": "font_extend",
    "sz": "font_size",
}

_UNDERLINES = {
    "double": FontUnderline.DOUBLE,
    "doubleAccounting": FontUnderline.DOUBLE_ACCOUNTING,
    "singleAccounting": FontUnderline.SINGLE_ACCOUNTING,
}

_SCRIPTS = {
    "superscript": FontScript.SUPER,
    "subscript": FontScript.SUB,
}

_PATTERNS = {pattern.value: pattern for pattern in FillPattern}

_BORDER_STYLES = {style.value: style for style in BorderStyle}

_BORDER_SIDES = ("left", "right", "top", "bottom", "diagonal")

_HORIZONTAL = {
    "left": HorizontalAlignment.LEFT,
    "center": HorizontalAlignment.CENTER,
    "right": HorizontalAlignment.RIGHT,
    "justify": HorizontalAlignment.JUSTIFY,
    "centerContinuous": HorizontalAlignment.MERGE,
    "distributed": HorizontalAlignment.DISTRIBUTED,
}

_VERTICAL = {
    "top": VerticalAlignment.TOP,
    "center": VerticalAlignment.CENTER,
    "justify": VerticalAlignment.JUSTIFY,
    "distributed": VerticalAlignment.DISTRIBUTED,
}


def load_styles(data: bytes | str) -> Styles:
    """Build a style table from the contents of a styles.xml part.

    Malformed XML raises :class:`xml.etree.ElementTree.ParseError`.
    """
    root = ET.fromstring(data)
    styles = Styles(new_from_scratch=False)
    readers = {
        "numFmts": _read_num_fmts,
        "fonts": _read_fonts,
        "fills": _read_fills,
        "borders": _read_borders,
        "cellXfs": _read_cell_xfs,
        "dxfs": _read_dxfs,
        "colors": _read_colors,
    }
    for child in root:
        reader = readers.get(_local(child.tag))
        if reader is not None:
            reader(styles, child)
    return styles


def _local(tag: str) -> str:
    return tag.rpartition("}")[2]


def _children(element: ET.Element, name: str) -> Iterator[ET.Element]:
    return (child for child in element if _local(child.tag) == name)


def _to_int(text: str | None) -> int:
    try:
        return int((text or "").strip())
    except ValueError:
        return 0


def _check_count(element: ET.Element, actual: int, what: str) -> None:
    if "count" in element.attrib and _to_int(element.get("count")) != actual:
        log.warning("error read %s: count %s, found %d", what, element.get("count"), actual)


def _copy_fields(target: CellFormat, source: CellFormat, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(source, name)
        if value is not None:
            setattr(target, name, value)


def _read_num_fmts(styles: Styles, element: ET.Element) -> None:
    for num_fmt in _children(element, "numFmt"):
        fmt_id = _to_int(num_fmt.get("numFmtId"))
        code = num_fmt.get("formatCode", "")
        if fmt_id >= styles.next_custom_num_fmt_id:
            styles.next_custom_num_fmt_id = fmt_id + 1
        styles.register_custom_num_fmt(fmt_id, code)
    _check_count(element, len(styles.custom_num_fmt_ids), "custom numFmts")


def _read_fonts(styles: Styles, element: ET.Element) -> None:
    for font in _children(element, "font"):
        fmt = CellFormat()
        _read_font(font, fmt)
        styles.fonts.append(fmt)
        styles.fonts_by_key[fmt.font_key()] = fmt
        if not fmt.is_empty():
            fmt.font_index = len(styles.fonts) - 1
    _check_count(element, len(styles.fonts), "fonts")


def _read_font(font: ET.Element, fmt: CellFormat) -> None:
    for child in font:
        name = _local(child.tag)
        val = child.get("val", "")
        if name == "name":
            fmt.font_name = val
        elif name in _FONT_FLAGS:
            setattr(fmt, _FONT_FLAGS[name], True)
        elif name in _FONT_INTS:
            setattr(fmt, _FONT_INTS[name], _to_int(val))
        elif name == "color":
            fmt.font_color = XlsxColor.load_from_xml(child)
        elif name == "u":
            fmt.font_underline = _UNDERLINES.get(val, FontUnderline.SINGLE)
        elif name == "vertAlign":
            if val in _SCRIPTS:
                fmt.font_script = _SCRIPTS[val]
        elif name == "scheme":
            fmt.font_scheme = val


def _read_fills(styles: Styles, element: ET.Element) -> None:
    for fill in _children(element, "fill"):
        fmt = CellFormat()
        _read_fill(fill, fmt)
        styles.fills.append(fmt)
        styles.fills_by_key[fmt.fill_key()] = fmt
        if not fmt.is_empty():
            fmt.fill_index = len(styles.fills) - 1
    _check_count(element, len(styles.fills), "fills")


def _read_fill(fill: ET.Element, fmt: CellFormat) -> None:
    for pattern_fill in _children(fill, "patternFill"):
        if "patternType" not in pattern_fill.attrib:
            continue
        pattern = _PATTERNS.get(pattern_fill.get("patternType", ""), FillPattern.NONE)
        fmt.fill_pattern = pattern
        solid = pattern is FillPattern.SOLID
        for child in pattern_fill:
            name = _local(child.tag)
            if name not in ("fgColor", "bgColor"):
                continue
            color = XlsxColor.load_from_xml(child)
            # For a solid fill Excel swaps the roles of foreground and background.
            if (name == "fgColor") != solid:
                fmt.fill_fg_color = color
            else:
                fmt.fill_bg_color = color


def _read_borders(styles: Styles, element: ET.Element) -> None:
    for border in _children(element, "border"):
        fmt = CellFormat()
        _read_border(border, fmt)
        styles.borders.append(fmt)
        styles.borders_by_key[fmt.border_key()] = fmt
        if not fmt.is_empty():
            fmt.border_index = len(styles.borders) - 1
    _check_count(element, len(styles.borders), "borders")


def _read_border(border: ET.Element, fmt: CellFormat) -> None:
    is_up = "diagonalUp" in border.attrib
    is_down = "diagonalDown" in border.attrib
    if is_up and is_down:
        fmt.diagonal_border_type = DiagonalBorderType.BOTH
    elif is_up:
        fmt.diagonal_border_type = DiagonalBorderType.UP
    elif is_down:
        fmt.diagonal_border_type = DiagonalBorderType.DOWN

    for child in border:
        side = _local(child.tag)
        if side not in _BORDER_SIDES:
            continue
        style, color = _read_sub_border(child)
        setattr(fmt, f"{side}_border_style", None if style is BorderStyle.NONE else style)
        if not color.is_invalid():
            setattr(fmt, f"{side}_border_color", color)


def _read_sub_border(element: ET.Element) -> tuple[BorderStyle, XlsxColor]:
    style = _BORDER_STYLES.get(element.get("style", ""))
    if style is None:
        return BorderStyle.NONE, XlsxColor()
    color = XlsxColor()
    for child in _children(element, "color"):
        color = XlsxColor.load_from_xml(child)
    return style, color


def _read_cell_xfs(styles: Styles, element: ET.Element) -> None:
    for xf in _children(element, "xf"):
        fmt = CellFormat()
        attrs = xf.attrib

        if "numFmtId" in attrs and parse_xsd_boolean(attrs.get("applyNumberFormat", "")):
            fmt_id = _to_int(attrs["numFmtId"])
            fmt.num_fmt_id = fmt_id
            if fmt_id in styles.custom_num_fmt_ids:
                fmt.number_format = styles.custom_num_fmt_ids[fmt_id]

        for id_attr, apply_attr, table, names, what in (
            ("fontId", "applyFont", styles.fonts, FONT_FIELDS, "fontId"),
            ("fillId", "applyFill", styles.fills, FILL_FIELDS, "fillId"),
            ("borderId", "applyBorder", styles.borders, BORDER_FIELDS, "borderId"),
        ):
            if id_attr not in attrs:
                continue
            idx = _to_int(attrs[id_attr])
            if idx >= len(table):
                log.debug("Error read styles.xml, cellXfs %s", what)
            elif parse_xsd_boolean(attrs.get(apply_attr, "")):
                _copy_fields(fmt, table[idx], names)

        if parse_xsd_boolean(attrs.get("applyAlignment", "")):
            first = next(iter(xf), None)
            if first is not None and _local(first.tag) == "alignment":
                _read_alignment(first, fmt)

        styles.add_xf_format(fmt, force=True)
    _check_count(element, len(styles.xf_formats), "CellXfs")


def _read_alignment(alignment: ET.Element, fmt: CellFormat) -> None:
    attrs = alignment.attrib
    if attrs.get("horizontal") in _HORIZONTAL:
        fmt.horizontal_alignment = _HORIZONTAL[attrs["horizontal"]]
    if attrs.get("vertical") in _VERTICAL:
        fmt.vertical_alignment = _VERTICAL[attrs["vertical"]]
    if "indent" in attrs:
        fmt.indent = _to_int(attrs["indent"])
    if "textRotation" in attrs:
        fmt.rotation = _to_int(attrs["textRotation"])
    if "wrapText" in attrs:
        fmt.text_wrap = True
    if "shrinkToFit" in attrs:
        fmt.shrink_to_fit = True


def _read_dxfs(styles: Styles, element: ET.Element) -> None:
    for dxf in _children(element, "dxf"):
        fmt = CellFormat()
        for child in dxf:
            name = _local(child.tag)
            if name == "numFmt":
                fmt.num_fmt_id = _to_int(child.get("numFmtId"))
                fmt.number_format = child.get("formatCode", "")
            elif name == "font":
                _read_font(child, fmt)
            elif name == "fill":
                _read_fill(child, fmt)
            elif name == "border":
                _read_border(child, fmt)
        styles.add_dxf_format(fmt, force=True)
    _check_count(element, len(styles.dxf_formats), "dxfs")


def _read_colors(styles: Styles, element: ET.Element) -> None:
    for indexed in _children(element, "indexedColors"):
        styles.indexed_colors = [
            from_argb_string(rgb_color.get("rgb", ""))
            for rgb_color in _children(indexed, "rgbColor")
        ]
        if styles.indexed_colors:
            styles.is_indexed_colors_default = False