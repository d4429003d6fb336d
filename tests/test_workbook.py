import pytest

from xlsxbook.sheetinfo import SheetState, SheetType
from xlsxbook.workbook import Workbook


def test_new_workbook_defaults():
    book = Workbook()
    assert book.sheet_count() == 0
    assert book.date1904 is False
    assert book.strings_to_hyperlinks_enabled is True
    assert book.default_date_format == "yyyy-mm-dd"
    assert len(book.styles.xf_formats) == 1


def test_loaded_workbook_has_empty_styles():
    book = Workbook(new_from_scratch=False)
    assert book.styles.xf_formats == []


def test_generated_sheet_names_and_ids():
    book = Workbook()
    first = book.add_sheet()
    second = book.add_sheet()
    chart = book.add_sheet(sheet_type=SheetType.CHARTSHEET)
    assert book.worksheet_names() == ["Sheet1", "Sheet2", "Chart1"]
    assert [first.sheet_id, second.sheet_id, chart.sheet_id] == [1, 2, 3]


def test_generated_name_skips_used_names():
    book = Workbook()
    book.add_sheet("Sheet1")
    created = book.add_sheet()
    assert created.name != "Sheet1"
    assert len(set(book.worksheet_names())) == 2


def test_duplicate_name_rejected():
    book = Workbook()
    book.add_sheet("Data")
    with pytest.raises(ValueError):
        book.add_sheet("Data")
    assert book.sheet_count() == 1


def test_name_is_made_safe():
    book = Workbook()
    sheet = book.add_sheet("a/b")
    assert sheet.name == "a b"


def test_insert_makes_sheet_active():
    book = Workbook()
    book.add_sheet("A")
    book.add_sheet("B")
    inserted = book.insert_sheet(0, "C")
    assert book.worksheet_names() == ["C", "A", "B"]
    assert book.active_sheet() is inserted


def test_insert_out_of_range():
    book = Workbook()
    with pytest.raises(IndexError):
        book.insert_sheet(2, "X")


def test_unsupported_type_rejected():
    book = Workbook()
    with pytest.raises(ValueError):
        book.add_sheet("D", SheetType.DIALOGSHEET)


def test_active_sheet_creates_sheet_when_empty():
    book = Workbook()
    active = book.active_sheet()
    assert book.sheet_count() == 1
    assert active.name == "Sheet1"


def test_set_active_sheet():
    book = Workbook()
    book.add_sheet("A")
    book.add_sheet("B")
    book.set_active_sheet(0)
    assert book.active_sheet().name == "A"
    with pytest.raises(IndexError):
        book.set_active_sheet(5)


def test_sheet_lookup():
    book = Workbook()
    book.add_sheet("A")
    assert book.sheet(0).name == "A"
    with pytest.raises(IndexError):
        book.sheet(1)
    with pytest.raises(IndexError):
        book.sheet(-1)


def test_rename_sheet():
    book = Workbook()
    book.add_sheet("A")
    book.add_sheet("B")
    book.rename_sheet(0, "C")
    assert book.worksheet_names() == ["C", "B"]
    with pytest.raises(ValueError):
        book.rename_sheet(0, "B")
    with pytest.raises(IndexError):
        book.rename_sheet(3, "Z")


def test_delete_sheet():
    book = Workbook()
    book.add_sheet("A")
    with pytest.raises(ValueError):
        book.delete_sheet(0)
    book.add_sheet("B")
    book.delete_sheet(0)
    assert book.worksheet_names() == ["B"]


def test_delete_sheet_bad_index():
    book = Workbook()
    book.add_sheet("A")
    book.add_sheet("B")
    with pytest.raises(IndexError):
        book.delete_sheet(2)


def test_move_sheet():
    book = Workbook()
    for name in ("A", "B", "C"):
        book.add_sheet(name)
    book.move_sheet(0, 2)
    assert book.worksheet_names() == ["B", "C", "A"]
    book.move_sheet(2, 10)
    assert book.worksheet_names() == ["B", "C", "A"]
    with pytest.raises(ValueError):
        book.move_sheet(1, 1)
    with pytest.raises(IndexError):
        book.move_sheet(7, 0)


def test_copy_sheet_generated_name():
    book = Workbook()
    book.add_sheet("Sheet1")
    copied = book.copy_sheet(0)
    assert copied.name == "Sheet1(2)"
    again = book.copy_sheet(0)
    assert again.name == "Sheet1(3)"
    assert book.sheet_count() == 3
    assert copied.sheet_id > book.sheet(0).sheet_id


def test_copy_sheet_named_and_errors():
    book = Workbook()
    book.add_sheet("A", SheetType.CHARTSHEET)
    copied = book.copy_sheet(0, "B")
    assert copied.name == "B"
    assert copied.sheet_type is SheetType.CHARTSHEET
    with pytest.raises(ValueError):
        book.copy_sheet(0, "B")
    with pytest.raises(IndexError):
        book.copy_sheet(4)


def test_define_name_strips_equals_and_resolves_scope():
    book = Workbook()
    book.add_sheet("A")
    local = book.add_sheet("B")
    defined = book.define_name("Total", "=B!$A$1", "sum", "B")
    assert defined.formula == "B!$A$1"
    assert defined.sheet_id == local.sheet_id
    assert defined.comment == "sum"
    assert book.defined_names == [defined]


def test_define_name_unknown_scope_is_global():
    book = Workbook()
    book.add_sheet("A")
    defined = book.define_name("X", "A!$B$2", scope="Missing")
    assert defined.sheet_id == -1
    assert defined.formula == "A!$B$2"


def test_sheets_by_type_and_visibility():
    book = Workbook()
    work = book.add_sheet("W")
    chart = book.add_sheet("C", SheetType.CHARTSHEET)
    assert book.sheets_by_type(SheetType.WORKSHEET) == [work]
    assert book.sheets_by_type(SheetType.CHARTSHEET) == [chart]
    chart.state = SheetState.HIDDEN
    assert book.visible_sheets() == [work]


def test_loaded_sheet_keeps_id_and_advances_counter():
    book = Workbook(new_from_scratch=False)
    loaded = book._add_loaded_sheet("Imported", 7)
    assert loaded.sheet_id == 7
    created = book.add_sheet()
    assert created.sheet_id == loaded.sheet_id + 1