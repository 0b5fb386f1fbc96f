import unittest

from sheet_writer.exceptions import InvalidSheetNameError, SheetNotFoundError, WriterNotOpenedError
from sheet_writer.manager import WorkbookManager
from sheet_writer.options import Options, OptionsManager
from sheet_writer.row import Row
from sheet_writer.sheet import Sheet
from sheet_writer.style import Style


class FakeOutput:
    """Records what the workbook manager asks an output encoder to do."""
    MAX_ROWS_PER_SHEET = 100

    def __init__(self):
        self.workbooks_created = 0
        self.saved = []

    def new_workbook(self, options):
        self.workbooks_created += 1

    def new_worksheet(self, worksheet_name):
        return []

    def new_entry(self, worksheet, row_idx, entry, style=None):
        worksheet.append((row_idx, list(entry), style))

    def save(self, sink, worksheets):
        self.saved.append((sink, [(each.name, list(each.output_sheet)) for each in worksheets]))


def make_manager(max_rows=None, auto=True, **options):
    options_manager = OptionsManager("xlsx")
    if max_rows is not None:
        options_manager.set_option(Options.MAX_ROWS_PER_SHEET, max_rows)
    options_manager.set_option(Options.SHOULD_CREATE_NEW_SHEETS_AUTOMATICALLY, auto)
    for name, value in options.items():
        options_manager.set_option(name, value)
    output = FakeOutput()
    return WorkbookManager(options_manager, output), output


class TestWorkbookManager(unittest.TestCase):
    def test_no_workbook_before_first_sheet(self):
        manager, output = make_manager()
        self.assertIsNone(manager.get_workbook())
        self.assertEqual(manager.get_worksheets(), [])
        self.assertEqual(output.workbooks_created, 0)

    def test_sheets_are_appended_and_made_current(self):
        manager, output = make_manager()
        first = manager.add_new_sheet_and_make_it_current()
        second = manager.add_new_sheet_and_make_it_current("Totals")
        self.assertEqual([each.name for each in manager.get_worksheets()], ["Sheet1", "Totals"])
        self.assertEqual([each.external_sheet.index for each in manager.get_worksheets()], [0, 1])
        self.assertIs(manager.get_current_worksheet(), second)
        self.assertEqual(first.external_sheet.workbook_id, manager.get_workbook().internal_id)
        self.assertEqual(output.workbooks_created, 1)

    def test_default_names_skip_used_names(self):
        manager, _ = make_manager(sheet_name_prefix="Page")
        manager.add_new_sheet_and_make_it_current()
        manager.add_new_sheet_and_make_it_current("Page3")
        third = manager.add_new_sheet_and_make_it_current()
        self.assertEqual(third.name, "Page4")

    def test_sheet_names_are_validated(self):
        manager, _ = make_manager()
        manager.add_new_sheet_and_make_it_current("Data")
        for bad_name in ["data", "a" * 32, "bad/name", "what?", "'quoted'", ""]:
            with self.assertRaises(InvalidSheetNameError, msg=bad_name):
                manager.add_new_sheet_and_make_it_current(bad_name)
        self.assertEqual(len(manager.get_worksheets()), 1)

    def test_rows_go_to_the_current_sheet_in_order(self):
        manager, _ = make_manager()
        first = manager.add_new_sheet_and_make_it_current()
        manager.add_row_to_current_worksheet(Row(["a"]))
        second = manager.add_new_sheet_and_make_it_current()
        manager.add_row_to_current_worksheet(Row(["b"]))
        manager.set_current_sheet(first.external_sheet)
        manager.add_row_to_current_worksheet(Row(["c"]))

        self.assertEqual([entry[:2] for entry in first.output_sheet], [(0, ["a"]), (1, ["c"])])
        self.assertEqual([entry[:2] for entry in second.output_sheet], [(0, ["b"])])
        self.assertEqual(first.last_written_row_index, 2)
        self.assertEqual(second.last_written_row_index, 1)

    def test_pagination_creates_a_new_sheet(self):
        manager, _ = make_manager(max_rows=2)
        manager.add_new_sheet_and_make_it_current()
        for value in ["a", "b", "c"]:
            manager.add_row_to_current_worksheet(Row([value]))
        worksheets = manager.get_worksheets()
        self.assertEqual(len(worksheets), 2)
        self.assertEqual([entry[1] for entry in worksheets[0].output_sheet], [["a"], ["b"]])
        self.assertEqual([entry[1] for entry in worksheets[1].output_sheet], [["c"]])
        self.assertIs(manager.get_current_worksheet(), worksheets[1])

    def test_capacity_is_capped_by_the_output(self):
        manager, _ = make_manager(max_rows=1000)
        self.assertEqual(manager.max_rows_per_sheet, FakeOutput.MAX_ROWS_PER_SHEET)

    def test_full_sheet_drops_rows_when_auto_creation_is_disabled(self):
        manager, _ = make_manager(max_rows=1, auto=False)
        worksheet = manager.add_new_sheet_and_make_it_current()
        manager.add_row_to_current_worksheet(Row(["a"]))
        with self.assertLogs("sheet_writer", level="WARNING"):
            manager.add_row_to_current_worksheet(Row(["b"]))
        self.assertEqual(len(manager.get_worksheets()), 1)
        self.assertEqual(len(worksheet.output_sheet), 1)

    def test_set_current_sheet_rejects_foreign_handles(self):
        manager, _ = make_manager()
        current = manager.add_new_sheet_and_make_it_current()
        other, _ = make_manager()
        foreign = other.add_new_sheet_and_make_it_current().external_sheet
        workbook_id = manager.get_workbook().internal_id

        for sheet in [foreign, Sheet(5, "Sheet6", workbook_id), Sheet(0, "Renamed", workbook_id), "Sheet1", None]:
            with self.assertRaises(SheetNotFoundError, msg=repr(sheet)):
                manager.set_current_sheet(sheet)
        self.assertIs(manager.get_current_worksheet(), current)

    def test_handles_compare_by_value(self):
        manager, _ = make_manager()
        manager.add_new_sheet_and_make_it_current()
        manager.add_new_sheet_and_make_it_current()
        workbook_id = manager.get_workbook().internal_id
        manager.set_current_sheet(Sheet(0, "Sheet1", workbook_id))
        self.assertEqual(manager.get_current_worksheet().name, "Sheet1")

    def test_styles(self):
        default_style = Style(font_name="Arial")
        manager, _ = make_manager(default_row_style=default_style)
        worksheet = manager.add_new_sheet_and_make_it_current()
        manager.add_row_to_current_worksheet(Row(["plain"]))
        manager.add_row_to_current_worksheet(Row(["row style"], Style(bold=True)))
        manager.add_row_to_current_worksheet(Row(["call style"], Style(bold=True)), Style(italic=True))
        styles = [entry[2] for entry in worksheet.output_sheet]
        self.assertEqual(styles, [
            default_style,
            Style(font_name="Arial", bold=True),
            Style(font_name="Arial", italic=True),
        ])

    def test_close_saves_once(self):
        manager, output = make_manager()
        manager.add_new_sheet_and_make_it_current()
        manager.add_row_to_current_worksheet(Row(["a"]))
        manager.close("sink")
        manager.close("sink")
        self.assertEqual(len(output.saved), 1)
        self.assertEqual(output.saved[0][1], [("Sheet1", [(0, ["a"], Style())])])
        with self.assertRaises(WriterNotOpenedError):
            manager.add_row_to_current_worksheet(Row(["b"]))

    def test_close_without_workbook_saves_nothing(self):
        manager, output = make_manager()
        manager.close("sink")
        self.assertEqual(output.saved, [])


if __name__ == "__main__":
    unittest.main()
