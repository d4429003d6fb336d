"""Colours as stored in spreadsheet styles: RGB, theme or palette index."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Union

Rgba = tuple[int, int, int, int]
"""An RGB colour as (red, green, blue, alpha), each 0-255."""


def from_argb_string(c: str) -> Rgba:
    """Parse an "AARRGGBB" (or "RRGGBB") hex string into (r, g, b, a)."""
    text = c.lstrip("#")
    if len(text) == 6:
        text = "FF" + text
    if len(text) != 8:
        raise ValueError(f"invalid ARGB colour string: {c!r}")
    try:
        alpha, red, green, blue = (int(text[i:i + 2], 16) for i in range(0, 8, 2))
    except ValueError:
        raise ValueError(f"invalid ARGB colour string: {c!r}") from None
    return red, green, blue, alpha


def to_argb_string(c: Union[Rgba, tuple[int, int, int]]) -> str:
    """Format an (r, g, b[, a]) colour as an upper-case "AARRGGBB" string."""
    if len(c) == 3:
        red, green, blue = c
        alpha = 255
    elif len(c) == 4:
        red, green, blue, alpha = c
    else:
        raise ValueError(f"colour must have 3 or 4 components: {c!r}")
    for part in (red, green, blue, alpha):
        if not 0 <= part <= 255:
            raise ValueError(f"colour component out of range: {c!r}")
    return f"{alpha:02X}{red:02X}{green:02X}{blue:02X}"


@dataclass(frozen=True)
class XlsxColor:
    """A style colour. With no value set it is invalid and saves as automatic."""

    rgb: Rgba | None = None
    theme: str | None = None
    tint: str = ""
    indexed: int | None = None

    @classmethod
    def from_rgb(cls, rgb: Union[str, Rgba, tuple[int, int, int]]) -> XlsxColor:
        if isinstance(rgb, str):
            return cls(rgb=from_argb_string(rgb))
        return cls(rgb=from_argb_string(to_argb_string(rgb)))

    @classmethod
    def from_theme(cls, theme: str, tint: str = "") -> XlsxColor:
        return cls(theme=theme, tint=tint)

    @classmethod
    def from_index(cls, index: int) -> XlsxColor:
        return cls(indexed=index)

    def is_theme_color(self) -> bool:
        return self.theme is not None

    def is_indexed_color(self) -> bool:
        return self.indexed is not None

    def is_rgb_color(self) -> bool:
        return self.rgb is not None

    def is_invalid(self) -> bool:
        return self.rgb is None and self.theme is None and self.indexed is None

    @property
    def theme_color(self) -> list[str]:
        """The theme number and tint, or an empty list for non-theme colours."""
        return [self.theme, self.tint] if self.theme is not None else []

    def save_to_xml(self, parent: ET.Element, node: str = "") -> ET.Element:
        """Append this colour to *parent* as an empty element named *node* or "color"."""
        element = ET.SubElement(parent, node or "color")
        if self.rgb is not None:
            element.set("rgb", to_argb_string(self.rgb))
        elif self.theme is not None:
            element.set("theme", self.theme)
            if self.tint:
                element.set("tint", self.tint)
        elif self.indexed is not None:
            element.set("indexed", str(self.indexed))
        else:
            element.set("auto", "1")
        return element

    @classmethod
    def load_from_xml(cls, element: ET.Element) -> XlsxColor:
        """Read a colour from the attributes of *element*."""
        attrs = element.attrib
        if "rgb" in attrs:
            return cls(rgb=from_argb_string(attrs["rgb"]))
        if "theme" in attrs:
            return cls(theme=attrs["theme"], tint=attrs.get("tint", ""))
        if "indexed" in attrs:
            return cls(indexed=int(attrs["indexed"]))
        return cls()