# xlsxbook

This package provides pure-Python building blocks for the parts of an Office
Open XML spreadsheet (`.xlsx`) package. It depends only on the standard library.

## Modules

- **`xlsxbook.utility`** holds the helpers shared by the other modules.
  - `datetime_to_number` and `datetime_from_number` convert to and from Excel
    serial numbers. Both the 1900 and the 1904 epoch are supported, and the
    1900 leap-year quirk is handled. `datetime_from_number` returns a naive
    `datetime`.
  - `time_to_number` converts a time of day.
  - `parse_xsd_boolean` reads XSD boolean values.
  - `split_path` and `get_rel_file_path` work with package paths.
  - `create_safe_sheet_name` produces a valid sheet name. It replaces the
    forbidden characters, replaces a leading or trailing apostrophe, and
    truncates the name to 31 characters.
  - `escape_sheet_name` and `unescape_sheet_name` quote and unquote sheet
    names for use in formulas. Both raise `ValueError` when the input is
    already in, or not in, the expected form.
  - `is_space_reserve_needed` reports whether a string has leading or trailing
    whitespace.
- **`xlsxbook.color`** handles colours.
  - `XlsxColor` is a frozen dataclass that holds an RGB, theme or indexed
    colour. It can be built with `from_rgb`, `from_theme` or `from_index`. A
    colour with no value set is invalid, and `save_to_xml` writes it as
    `auto="1"`. `save_to_xml` appends the colour element to an
    `xml.etree.ElementTree` parent. `load_from_xml` reads a colour back from
    an element.
  - `from_argb_string` and `to_argb_string` convert between `"AARRGGBB"`
    strings and `(r, g, b, a)` tuples.
- **`xlsxbook.cellformat`** defines formats.
  - `CellFormat` is a dataclass of font, fill, border, alignment and
    number-format properties. A property set to `None` is unset.
  - It has key methods (`font_key`, `fill_key`, `border_key`, `format_key`) and
    `has_*_data` / `is_empty` queries.
  - The enumerations are `FillPattern`, `BorderStyle`, `FontUnderline`,
    `FontScript`, `HorizontalAlignment`, `VerticalAlignment` and
    `DiagonalBorderType`.
- **`xlsxbook.styles`** provides `Styles`, the style table.
  - `add_xf_format` and `add_dxf_format` register formats and assign their
    font, fill, border, xf and dxf indices.
  - `fix_num_fmt` assigns number-format ids. Built-in codes map to their
    standard ids, and custom codes are numbered from 176.
  - `xf_format` / `dxf_format` look a format up. `color_by_index` looks up a
    colour in the indexed palette.
  - `to_xml` / `save_to_xml_file` produce `styles.xml`.
- **`xlsxbook.stylesreader`** provides `load_styles`. It parses the contents of
  a `styles.xml` part into a `Styles` table. Malformed XML raises
  `xml.etree.ElementTree.ParseError`.
- **`xlsxbook.sheetinfo`** describes sheets.
  - `Sheet` is a sheet's name, id, type, state and file path. `Sheet.copy`
    makes a new sheet of the same type.
  - `SheetType` and `SheetState` are enumerations.
  - `DefinedName` is a workbook defined name.
- **`xlsxbook.workbook`** provides `Workbook`. It holds the sheet list,
  workbook options and defined names, and owns a `Styles` table.
  - It can add, insert, rename, delete, copy and move sheets.
  - It tracks the active sheet.
  - It defines names, either globally or scoped to a sheet.
  - An index out of range raises `IndexError`. A duplicate name or a
    disallowed operation raises `ValueError`, for example deleting the last
    sheet or moving a sheet onto its own position.
- **`xlsxbook.workbookxml`** handles the workbook part.
  - `workbook_to_xml` returns the bytes of `workbook.xml` together with the
    part's relationships as `(type, target)` pairs. The pair at position *i*
    has the id `rId{i+1}`.
  - `save_workbook_xml` writes the same bytes to a stream.
  - `load_workbook_xml` fills a `Workbook` from `workbook.xml`, given a
    mapping of relationship ids.
- **`xlsxbook.ziparchive`** handles the zip container.
  - `ZipReader` lists and reads the files of a zip archive. If the archive
    cannot be opened, `exists()` returns `False`.
  - `ZipWriter` writes a deflate-compressed archive. Failures are reported by
    `error()` rather than raised.
  - Both classes are context managers.

## Example

```python
from datetime import datetime

from xlsxbook.cellformat import CellFormat
from xlsxbook.stylesreader import load_styles
from xlsxbook.utility import create_safe_sheet_name, datetime_to_number
from xlsxbook.workbook import Workbook
from xlsxbook.workbookxml import workbook_to_xml

serial = datetime_to_number(datetime(2014, 1, 1))

book = Workbook()
book.add_sheet(create_safe_sheet_name("Hours: January"))  # "Hours  January"
book.add_sheet()                                           # "Sheet1"
book.define_name("Total", "=Sheet1!$A$1")

fmt = CellFormat(font_bold=True, number_format="0.000")
book.styles.add_xf_format(fmt)
print(fmt.xf_index, fmt.num_fmt_id)  # 1 176

styles_xml = book.styles.to_xml()
reloaded = load_styles(styles_xml)

workbook_xml, relationships = workbook_to_xml(book)
```

## What it does not do

The package covers styles, colours, workbook structure and the zip container.

It does not model cell contents, worksheet parts, shared strings, themes,
drawings or charts. It does not write the `[Content_Types].xml` or `.rels`
parts. There is no single call that opens or saves a complete `.xlsx` file.
To produce a full package, you assemble these pieces yourself.

It has no command-line interface.

## Tests

The tests use pytest. Install the package with its `test` extra and run
pytest from the project directory.