"""Cell formats: font, fill, border, alignment and number format properties."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Hashable

from .color import XlsxColor


class FillPattern(Enum):
    """Pattern fill types, valued by their name in styles XML."""

    NONE = "none"
    SOLID = "solid"
    MEDIUM_GRAY = "mediumGray"
    DARK_GRAY = "darkGray"
    LIGHT_GRAY = "lightGray"
    DARK_HORIZONTAL = "darkHorizontal"
    DARK_VERTICAL = "darkVertical"
    DARK_DOWN = "darkDown"
    DARK_UP = "darkUp"
    DARK_GRID = "darkGrid"
    DARK_TRELLIS = "darkTrellis"
    LIGHT_HORIZONTAL = "lightHorizontal"
    LIGHT_VERTICAL = "lightVertical"
    LIGHT_DOWN = "lightDown"
    LIGHT_UP = "lightUp"
    LIGHT_TRELLIS = "lightTrellis"
    GRAY125 = "gray125"
    GRAY0625 = "gray0625"
    LIGHT_GRID = "lightGrid"


class BorderStyle(Enum):
    """Border line styles, valued by their name in styles XML."""

    NONE = "none"
    THIN = "thin"
    MEDIUM = "medium"
    DASHED = "dashed"
    DOTTED = "dotted"
    THICK = "thick"
    DOUBLE = "double"
    HAIR = "hair"
    MEDIUM_DASHED = "mediumDashed"
    DASH_DOT = "dashDot"
    MEDIUM_DASH_DOT = "mediumDashDot"
    DASH_DOT_DOT = "dashDotDot"
    MEDIUM_DASH_DOT_DOT = "mediumDashDotDot"
    SLANT_DASH_DOT = "slantDashDot"


class FontUnderline(Enum):
    """Font underline kinds, valued by their name in styles XML."""

    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"
    SINGLE_ACCOUNTING = "singleAccounting"
    DOUBLE_ACCOUNTING = "doubleAccounting"


class FontScript(Enum):
    """Vertical position of the text, valued by the vertAlign XML name."""

    NORMAL = "baseline"
    SUPER = "superscript"
    SUB = "subscript"


class HorizontalAlignment(Enum):
    """Horizontal cell alignment, valued by its name in styles XML."""

    GENERAL = "general"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    FILL = "fill"
    JUSTIFY = "justify"
    MERGE = "centerContinuous"
    DISTRIBUTED = "distributed"


class VerticalAlignment(Enum):
    """Vertical cell alignment, valued by its name in styles XML."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"
    JUSTIFY = "justify"
    DISTRIBUTED = "distributed"


class DiagonalBorderType(Enum):
    """Which diagonal lines a border draws."""

    NONE = "none"
    UP = "up"
    DOWN = "down"
    BOTH = "both"


FONT_FIELDS = (
    "font_name",
    "font_size",
    "font_bold",
    "font_italic",
    "font_strike_out",
    "font_outline",
    "font_shadow",
    "font_underline",
    "font_script",
    "font_color",
    "font_charset",
    "font_family",
    "font_scheme",
    "font_condense",
    "font_extend",
)

FILL_FIELDS = (
    "fill_pattern",
    "fill_fg_color",
    "fill_bg_color",
)

BORDER_FIELDS = (
    "left_border_style",
    "right_border_style",
    "top_border_style",
    "bottom_border_style",
    "diagonal_border_style",
    "left_border_color",
    "right_border_color",
    "top_border_color",
    "bottom_border_color",
    "diagonal_border_color",
    "diagonal_border_type",
)

ALIGNMENT_FIELDS = (
    "horizontal_alignment",
    "vertical_alignment",
    "indent",
    "text_wrap",
    "shrink_to_fit",
    "rotation",
)

NUM_FMT_FIELDS = (
    "num_fmt_id",
    "number_format",
)

PROPERTY_FIELDS = FONT_FIELDS + FILL_FIELDS + BORDER_FIELDS + ALIGNMENT_FIELDS + NUM_FMT_FIELDS


@dataclass
class CellFormat:
    """A set of cell style properties; ``None`` means the property is not set.

    The ``*_index`` attributes are assigned when the format is registered
    with a style table and take no part in equality or in the keys.
    """

    # Font
    font_name: str | None = None
    font_size: int | None = None
    font_bold: bool | None = None
    font_italic: bool | None = None
    font_strike_out: bool | None = None
    font_outline: bool | None = None
    font_shadow: bool | None = None
    font_underline: FontUnderline | None = None
    font_script: FontScript | None = None
    font_color: XlsxColor | None = None
    font_charset: int | None = None
    font_family: int | None = None
    font_scheme: str | None = None
    font_condense: int | None = None
    font_extend: int | None = None

    # Fill
    fill_pattern: FillPattern | None = None
    fill_fg_color: XlsxColor | None = None
    fill_bg_color: XlsxColor | None = None

    # Border
    left_border_style: BorderStyle | None = None
    right_border_style: BorderStyle | None = None
    top_border_style: BorderStyle | None = None
    bottom_border_style: BorderStyle | None = None
    diagonal_border_style: BorderStyle | None = None
    left_border_color: XlsxColor | None = None
    right_border_color: XlsxColor | None = None
    top_border_color: XlsxColor | None = None
    bottom_border_color: XlsxColor | None = None
    diagonal_border_color: XlsxColor | None = None
    diagonal_border_type: DiagonalBorderType | None = None

    # Alignment
    horizontal_alignment: HorizontalAlignment | None = None
    vertical_alignment: VerticalAlignment | None = None
    indent: int | None = None
    text_wrap: bool | None = None
    shrink_to_fit: bool | None = None
    rotation: int | None = None

    # Number format
    num_fmt_id: int | None = None
    number_format: str | None = None

    # Indices in the style tables
    font_index: int | None = field(default=None, compare=False, repr=False)
    fill_index: int | None = field(default=None, compare=False, repr=False)
    border_index: int | None = field(default=None, compare=False, repr=False)
    xf_index: int | None = field(default=None, compare=False, repr=False)
    dxf_index: int | None = field(default=None, compare=False, repr=False)

    def _values(self, names: tuple[str, ...]) -> tuple[Any, ...]:
        return tuple(getattr(self, name) for name in names)

    def _has_any(self, names: tuple[str, ...]) -> bool:
        return any(value is not None for value in self._values(names))

    def font_key(self) -> Hashable:
        """A key equal for formats whose font properties are identical."""
        return ("font",) + self._values(FONT_FIELDS)

    def fill_key(self) -> Hashable:
        """A key equal for formats whose fill properties are identical."""
        return ("fill",) + self._values(FILL_FIELDS)

    def border_key(self) -> Hashable:
        """A key equal for formats whose border properties are identical."""
        return ("border",) + self._values(BORDER_FIELDS)

    def format_key(self) -> Hashable:
        """A key equal for formats whose properties are all identical."""
        return (
            self.font_key(),
            self.fill_key(),
            self.border_key(),
            ("alignment",) + self._values(ALIGNMENT_FIELDS),
            ("numfmt",) + self._values(NUM_FMT_FIELDS),
        )

    def has_font_data(self) -> bool:
        return self._has_any(FONT_FIELDS)

    def has_fill_data(self) -> bool:
        return self._has_any(FILL_FIELDS)

    def has_border_data(self) -> bool:
        return self._has_any(BORDER_FIELDS)

    def has_num_fmt_data(self) -> bool:
        return self._has_any(NUM_FMT_FIELDS)

    def has_alignment_data(self) -> bool:
        return self._has_any(ALIGNMENT_FIELDS)

    def is_empty(self) -> bool:
        """True when no property at all is set."""
        return not self._has_any(PROPERTY_FIELDS)


assert set(PROPERTY_FIELDS) == {
    f.name for f in fields(CellFormat) if f.compare
}, "property groups must cover every format property"