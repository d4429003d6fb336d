"""The workbook: its sheets, defined names, options and style table."""

from __future__ import annotations

from .sheetinfo import DefinedName, Sheet, SheetState, SheetType
from .styles import Styles
from .utility import create_safe_sheet_name

_NEW_SHEET_PREFIX = {
    SheetType.WORKSHEET: "Sheet",
    SheetType.CHARTSHEET: "Chart",
}


class Workbook:
    """An ordered collection of sheets with workbook-wide settings.

    A workbook created from scratch gets a style table holding the default
    formats; one meant to be filled from an existing file starts empty.
    """

    def __init__(self, new_from_scratch: bool = True) -> None:
        self.styles = Styles(new_from_scratch)
        self.sheets: list[Sheet] = []
        self.defined_names: list[DefinedName] = []

        self.strings_to_numbers_enabled = False
        self.strings_to_hyperlinks_enabled = True
        self.html_to_rich_string_enabled = False
        self.date1904 = False
        self.default_date_format = "yyyy-mm-dd"

        self.x_window = 240
        self.y_window = 15
        self.window_width = 16095
        self.window_height = 9660

        self.active_sheet_index = 0
        self.first_sheet = 0
        self.table_count = 0

        self.last_worksheet_index = 0
        self.last_chartsheet_index = 0
        self.last_sheet_id = 0

    # -- queries --------------------------------------------------------

    def sheet_count(self) -> int:
        return len(self.sheets)

    def sheet(self, index: int) -> Sheet:
        """The sheet at *index*; raises IndexError when out of range."""
        self._check_index(index)
        return self.sheets[index]

    def worksheet_names(self) -> list[str]:
        """Names of all sheets, in workbook order."""
        return [sheet.name for sheet in self.sheets]

    def sheets_by_type(self, sheet_type: SheetType) -> list[Sheet]:
        return [sheet for sheet in self.sheets if sheet.sheet_type is sheet_type]

    # -- sheet management -----------------------------------------------

    def add_sheet(self, name: str = "", sheet_type: SheetType = SheetType.WORKSHEET) -> Sheet:
        """Append a new sheet; an empty name gets a generated one."""
        return self.insert_sheet(len(self.sheets), name, sheet_type)

    def insert_sheet(
        self, index: int, name: str = "", sheet_type: SheetType = SheetType.WORKSHEET
    ) -> Sheet:
        """Insert a new sheet at *index* and make it the active one.

        Raises ValueError when the name is already used or the type cannot
        be created, and IndexError when *index* is out of range.
        """
        if not 0 <= index <= len(self.sheets):
            raise IndexError(f"sheet index out of range: {index}")
        if sheet_type not in _NEW_SHEET_PREFIX:
            raise ValueError(f"unsupported sheet type: {sheet_type}")

        names = self.worksheet_names()
        sheet_name = create_safe_sheet_name(name)
        if sheet_name:
            if sheet_name in names:
                raise ValueError(f"sheet name already in use: {sheet_name!r}")
        else:
            sheet_name = self._generate_name(sheet_type, names)

        self.last_sheet_id += 1
        sheet = Sheet(sheet_name, self.last_sheet_id, sheet_type)
        self.sheets.insert(index, sheet)
        self.active_sheet_index = index
        return sheet

    def _generate_name(self, sheet_type: SheetType, names: list[str]) -> str:
        prefix = _NEW_SHEET_PREFIX[sheet_type]
        while True:
            if sheet_type is SheetType.WORKSHEET:
                self.last_worksheet_index += 1
                number = self.last_worksheet_index
            else:
                self.last_chartsheet_index += 1
                number = self.last_chartsheet_index
            candidate = f"{prefix}{number}"
            if candidate not in names:
                return candidate

    def _add_loaded_sheet(
        self, name: str, sheet_id: int, sheet_type: SheetType = SheetType.WORKSHEET
    ) -> Sheet:
        """Append a sheet read from an existing file, keeping its id."""
        if sheet_type not in _NEW_SHEET_PREFIX:
            raise ValueError(f"unsupported sheet type: {sheet_type}")
        self.last_sheet_id = max(self.last_sheet_id, sheet_id)
        sheet = Sheet(name, sheet_id, sheet_type)
        self.sheets.append(sheet)
        return sheet

    def rename_sheet(self, index: int, name: str) -> None:
        """Rename the sheet at *index*; raises ValueError if the name is taken."""
        new_name = create_safe_sheet_name(name)
        self._check_index(index)
        if new_name in self.worksheet_names():
            raise ValueError(f"sheet name already in use: {new_name!r}")
        self.sheets[index].name = new_name

    def delete_sheet(self, index: int) -> None:
        """Remove the sheet at *index*; the last remaining sheet cannot go."""
        if len(self.sheets) <= 1:
            raise ValueError("a workbook must keep at least one sheet")
        self._check_index(index)
        del self.sheets[index]

    def move_sheet(self, src_index: int, dist_index: int) -> None:
        """Move the sheet at *src_index* to *dist_index*.

        A destination past the end appends the sheet.
        """
        if src_index == dist_index:
            raise ValueError("source and destination index are the same")
        self._check_index(src_index)
        sheet = self.sheets.pop(src_index)
        if 0 <= dist_index <= len(self.sheets):
            self.sheets.insert(dist_index, sheet)
        else:
            self.sheets.append(sheet)

    def copy_sheet(self, index: int, new_name: str = "") -> Sheet:
        """Append a copy of the sheet at *index*.

        Without a name the copy is called "<name>(2)", "<name>(3)", ...
        """
        self._check_index(index)
        names = self.worksheet_names()
        if new_name:
            if new_name in names:
                raise ValueError(f"sheet name already in use: {new_name!r}")
            sheet_name = create_safe_sheet_name(new_name)
        else:
            source_name = self.sheets[index].name
            copy_index = 1
            while True:
                copy_index += 1
                sheet_name = f"{source_name}({copy_index})"
                if sheet_name not in names:
                    break

        self.last_sheet_id += 1
        sheet = self.sheets[index].copy(sheet_name, self.last_sheet_id)
        self.sheets.append(sheet)
        return sheet

    def active_sheet(self) -> Sheet:
        """The active sheet; a sheet is added first if the workbook has none."""
        if not self.sheets:
            self.add_sheet()
        return self.sheets[self.active_sheet_index]

    def set_active_sheet(self, index: int) -> None:
        self._check_index(index)
        self.active_sheet_index = index

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.sheets):
            raise IndexError(f"sheet index out of range: {index}")

    # -- defined names --------------------------------------------------

    def define_name(
        self, name: str, formula: str, comment: str = "", scope: str = ""
    ) -> DefinedName:
        """Define *name* as *formula*, local to the sheet named *scope* if given.

        A leading "=" is dropped from the formula. An unknown scope makes
        the name global.
        """
        formula_text = formula[1:] if formula.startswith("=") else formula
        sheet_id = -1
        if scope:
            sheet_id = next(
                (sheet.sheet_id for sheet in self.sheets if sheet.name == scope), -1
            )
        defined = DefinedName(name, formula_text, comment, sheet_id)
        self.defined_names.append(defined)
        return defined

    def visible_sheets(self) -> list[Sheet]:
        return [sheet for sheet in self.sheets if sheet.state is SheetState.VISIBLE]