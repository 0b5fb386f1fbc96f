import unittest

from sheet_writer.exceptions import InvalidArgumentError
from sheet_writer.row import Row, to_row
from sheet_writer.style import Style, to_style


class TestStyle(unittest.TestCase):
    def test_invalid_vertical_alignment_is_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            Style(valign="middle")

    def test_invalid_alignment_is_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            Style(align="distributed")

    def test_invalid_font_size_is_rejected(self):
        with self.assertRaises(InvalidArgumentError):
            Style(font_size=0)

    def test_format_properties_translate_vertical_alignment(self):
        properties = Style(valign="center", bold=True, bg_color="yellow").to_format_properties()
        self.assertEqual(properties["valign"], "vcenter")
        self.assertTrue(properties["bold"])
        self.assertEqual(properties["bg_color"], "yellow")
        self.assertEqual(properties["font_name"], "Calibri")

    def test_named_styles(self):
        style = Style.from_name("percentage-blue-bold")
        self.assertEqual(style.num_format, "0.0000%")
        self.assertEqual(style.font_color, "blue")
        self.assertTrue(style.bold)

        self.assertEqual(Style.from_name("General").num_format, "General")
        self.assertFalse(Style.from_name("date-red").bold)

        highlight = Style.from_name("highlight-yellow")
        self.assertEqual(highlight.bg_color, "yellow")
        self.assertEqual(highlight.font_color, "black")

    def test_bad_named_styles(self):
        for name in ["purple", "general-purple", "general-red-italic", "highlight-orange", "general-red-bold-x"]:
            with self.assertRaises(InvalidArgumentError, msg=name):
                Style.from_name(name)

    def test_merge_keeps_base_for_default_fields(self):
        base = Style(font_name="Arial", valign="top")
        merged = Style(bold=True).merge(base)
        self.assertEqual(merged, Style(font_name="Arial", valign="top", bold=True))

    def test_merge_can_switch_off_base_settings(self):
        base = Style(bold=True, italic=True, font_name="Arial", wrap_text=True)
        merged = Style(bold=False, wrap_text=False, font_name="Calibri").merge(base)
        self.assertEqual(merged, Style(bold=False, italic=True, font_name="Calibri", wrap_text=False))
        properties = merged.to_format_properties()
        self.assertNotIn("bold", properties)
        self.assertTrue(properties["italic"])
        self.assertEqual(properties["font_name"], "Calibri")

    def test_unset_fields_fall_back_to_calibri_11(self):
        properties = Style().to_format_properties()
        self.assertEqual(properties["font_name"], "Calibri")
        self.assertEqual(properties["font_size"], 11)
        self.assertNotIn("bold", properties)

    def test_styles_are_hashable(self):
        self.assertEqual(len({Style(bold=True), Style(bold=True), Style()}), 2)

    def test_to_style(self):
        self.assertIsNone(to_style(None))
        self.assertEqual(to_style("integer").num_format, "#,##0")
        with self.assertRaises(InvalidArgumentError):
            to_style(42)


class TestRow(unittest.TestCase):
    def test_row_copies_cells(self):
        cells = ["a", 1, None, True]
        row = Row(cells)
        cells.append("b")
        self.assertEqual(row.cells, ["a", 1, None, True])
        self.assertEqual(len(row), 4)

    def test_row_rejects_a_string(self):
        with self.assertRaises(InvalidArgumentError):
            Row("abc")
        with self.assertRaises(InvalidArgumentError):
            Row(5)

    def test_to_row(self):
        row = Row(["x"], "general-red")
        self.assertIs(to_row(row), row)
        self.assertEqual(to_row(row, Style(bold=True)).style, Style(bold=True))
        self.assertEqual(to_row(("a", "b")).cells, ["a", "b"])


if __name__ == "__main__":
    unittest.main()
