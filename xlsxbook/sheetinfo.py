"""Sheet entries and defined names held by a workbook."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SheetType(Enum):
    """Kinds of sheet, valued by the suffix of their relationship type."""

    WORKSHEET = "worksheet"
    CHARTSHEET = "chartsheet"
    DIALOGSHEET = "dialogsheet"
    MACROSHEET = "xlMacrosheet"


class SheetState(Enum):
    """Visibility of a sheet, valued by its name in workbook XML."""

    VISIBLE = "visible"
    HIDDEN = "hidden"
    VERY_HIDDEN = "veryHidden"


@dataclass
class Sheet:
    """A sheet of a workbook as the workbook part sees it."""

    name: str
    sheet_id: int
    sheet_type: SheetType = SheetType.WORKSHEET
    state: SheetState = SheetState.VISIBLE
    file_path: str = ""

    def copy(self, name: str, sheet_id: int) -> Sheet:
        """A new visible sheet of the same type under *name* and *sheet_id*."""
        return Sheet(name=name, sheet_id=sheet_id, sheet_type=self.sheet_type)


@dataclass
class DefinedName:
    """A workbook defined name.

    *sheet_id* is the internal id of the sheet the name is local to, not its
    position in the workbook; -1 means the name is global.
    """

    name: str
    formula: str
    comment: str = ""
    sheet_id: int = -1