"""Reading and writing the workbook part (xl/workbook.xml)."""

from __future__ import annotations

import logging
import posixpath
import xml.etree.ElementTree as ET
from typing import BinaryIO, Mapping

from .sheetinfo import DefinedName, SheetState, SheetType
from .styles import SPREADSHEET_NS
from .utility import split_path
from .workbook import Workbook

log = logging.getLogger(__name__)

RELATIONSHIPS_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

_R_ID_KEYS = (f"{{{RELATIONSHIPS_NS}}}id", "r:id")

_STATE_NAMES = {
    SheetState.HIDDEN: "hidden",
    SheetState.VERY_HIDDEN: "veryHidden",
}

_STATES_BY_NAME = {name: state for state, name in _STATE_NAMES.items()}

_VIEW_ATTRIBUTES = {
    "xWindow": "x_window",
    "yWindow": "y_window",
    "windowWidth": "window_width",
    "windowHeight": "window_height",
    "firstSheet": "first_sheet",
    "activeTab": "active_sheet_index",
}


def _document_relationship(kind: str) -> str:
    return RELATIONSHIPS_NS + kind


def workbook_to_xml(
    workbook: Workbook, has_shared_strings: bool = False
) -> tuple[bytes, list[tuple[str, str]]]:
    """Serialize *workbook* as workbook.xml.

    Returns the XML bytes and the part's relationships as (type, target)
    pairs; the relationship at position i has the id ``rId{i + 1}``.
    A workbook without sheets gets one added first.
    """
    if not workbook.sheets:
        workbook.add_sheet()

    relationships: list[tuple[str, str]] = []

    def add_relationship(kind: str, target: str) -> str:
        relationships.append((_document_relationship(kind), target))
        return f"rId{len(relationships)}"

    root = ET.Element("workbook", {"xmlns": SPREADSHEET_NS, "xmlns:r": RELATIONSHIPS_NS})
    ET.SubElement(
        root,
        "fileVersion",
        {"appName": "xl", "lastEdited": "4", "lowestEdited": "4", "rupBuild": "4505"},
    )

    workbook_pr = ET.SubElement(root, "workbookPr")
    if workbook.date1904:
        workbook_pr.set("date1904", "1")
    workbook_pr.set("defaultThemeVersion", "124226")

    book_views = ET.SubElement(root, "bookViews")
    view = ET.SubElement(
        book_views,
        "workbookView",
        {
            "xWindow": str(workbook.x_window),
            "yWindow": str(workbook.y_window),
            "windowWidth": str(workbook.window_width),
            "windowHeight": str(workbook.window_height),
        },
    )
    # Only store firstSheet/activeTab when they differ from the defaults.
    if workbook.first_sheet > 0:
        view.set("firstSheet", str(workbook.first_sheet + 1))
    if workbook.active_sheet_index > 0:
        view.set("activeTab", str(workbook.active_sheet_index))

    sheets = ET.SubElement(root, "sheets")
    worksheet_number = 0
    chartsheet_number = 0
    for sheet in workbook.sheets:
        element = ET.SubElement(
            sheets, "sheet", {"name": sheet.name, "sheetId": str(sheet.sheet_id)}
        )
        state = _STATE_NAMES.get(sheet.state)
        if state is not None:
            element.set("state", state)
        if sheet.sheet_type is SheetType.WORKSHEET:
            worksheet_number += 1
            rid = add_relationship("/worksheet", f"worksheets/sheet{worksheet_number}.xml")
        else:
            chartsheet_number += 1
            rid = add_relationship("/chartsheet", f"chartsheets/sheet{chartsheet_number}.xml")
        element.set("r:id", rid)

    external_links = getattr(workbook, "external_links", ())
    if external_links:
        references = ET.SubElement(root, "externalReferences")
        for number, _ in enumerate(external_links, start=1):
            rid = add_relationship(
                "/externalLink", f"externalLinks/externalLink{number}.xml"
            )
            ET.SubElement(references, "externalReference", {"r:id": rid})

    if workbook.defined_names:
        defined_names = ET.SubElement(root, "definedNames")
        for defined in workbook.defined_names:
            element = ET.SubElement(defined_names, "definedName", {"name": defined.name})
            if defined.comment:
                element.set("comment", defined.comment)
            if defined.sheet_id != -1:
                local_id = next(
                    (
                        position
                        for position, sheet in enumerate(workbook.sheets)
                        if sheet.sheet_id == defined.sheet_id
                    ),
                    None,
                )
                if local_id is not None:
                    element.set("localSheetId", str(local_id))
            element.text = defined.formula

    ET.SubElement(root, "calcPr", {"calcId": "124519"})

    add_relationship("/theme", "theme/theme1.xml")
    add_relationship("/styles", "styles.xml")
    if has_shared_strings:
        add_relationship("/sharedStrings", "sharedStrings.xml")

    body = ET.tostring(root, encoding="unicode")
    return (_XML_DECLARATION + body).encode("utf-8"), relationships


def save_workbook_xml(
    workbook: Workbook, stream: BinaryIO, has_shared_strings: bool = False
) -> list[tuple[str, str]]:
    """Write workbook.xml to a binary *stream* and return its relationships."""
    data, relationships = workbook_to_xml(workbook, has_shared_strings)
    stream.write(data)
    return relationships


def _local(tag: str) -> str:
    return tag.rpartition("}")[2]


def _relationship_id(element: ET.Element) -> str:
    for key in _R_ID_KEYS:
        if key in element.attrib:
            return element.attrib[key]
    return ""


def _to_int(text: str | None) -> int:
    try:
        return int((text or "").strip())
    except ValueError:
        return 0


def _sheet_type(relationship_type: str) -> SheetType:
    for sheet_type in SheetType:
        if relationship_type.endswith("/" + sheet_type.value):
            return sheet_type
    log.warning("unknown sheet type: %r", relationship_type)
    return SheetType.WORKSHEET


def load_workbook_xml(
    workbook: Workbook,
    data: bytes | str,
    relationships: Mapping[str, tuple[str, str]],
    file_path: str = "xl/workbook.xml",
) -> list[str]:
    """Fill *workbook* from the contents of a workbook.xml part.

    *relationships* maps relationship ids to (type, target) pairs of the
    part found at *file_path*. Returns the package paths of the external
    links, which are also kept as ``workbook.external_links``.
    """
    root = ET.fromstring(data)
    base_dir = split_path(file_path)[0]
    external_links: list[str] = []

    def full_path(target: str) -> str:
        return posixpath.normpath(f"{base_dir}/{target}")

    for element in root.iter():
        name = _local(element.tag)
        attrs = element.attrib
        if name == "sheet":
            rel_type, target = relationships.get(_relationship_id(element), ("", ""))
            sheet = workbook._add_loaded_sheet(
                attrs.get("name", ""), _to_int(attrs.get("sheetId")), _sheet_type(rel_type)
            )
            sheet.state = _STATES_BY_NAME.get(attrs.get("state", ""), SheetState.VISIBLE)
            sheet.file_path = full_path(target)
        elif name == "workbookPr":
            if "date1904" in attrs:
                workbook.date1904 = True
        elif name == "workbookView":
            for attr, field_name in _VIEW_ATTRIBUTES.items():
                if attr in attrs:
                    setattr(workbook, field_name, _to_int(attrs[attr]))
        elif name == "externalReference":
            _, target = relationships.get(_relationship_id(element), ("", ""))
            external_links.append(full_path(target))
        elif name == "definedName":
            sheet_id = -1
            if "localSheetId" in attrs:
                sheet_id = workbook.sheets[_to_int(attrs["localSheetId"])].sheet_id
            workbook.defined_names.append(
                DefinedName(
                    name=attrs.get("name", ""),
                    formula=element.text or "",
                    comment=attrs.get("comment", ""),
                    sheet_id=sheet_id,
                )
            )

    workbook.external_links = external_links
    return external_links