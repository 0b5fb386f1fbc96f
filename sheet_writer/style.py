import logging
from dataclasses import dataclass, fields, replace
from typing import Optional

from sheet_writer.alignment import CellAlignment, CellVerticalAlignment
from sheet_writer.exceptions import InvalidArgumentError

# --- Logger Setup ---
logger = logging.getLogger(f"sheet_writer.{__name__}")
# --- End Logger Setup ---

# Define valid number formats for cells with Excel-compatible formats
VALID_NUMBER_FORMATS = {
    "general": "General",
    "text": "@",
    "number": "#,##0.00",
    "integer": "#,##0",
    "percentage": "0.0000%",
    "date": "mm/dd/yyyy",
    "time": "hh:mm:ss",
    "datetime": "mm/dd/yyyy hh:mm"
}

# Define valid font colors for named styles.
FONT_COLORS = [
    "red",
    "blue",
    "yellow",
    "green"
]

DEFAULT_FONT_NAME = "Calibri"
DEFAULT_FONT_SIZE = 11

# Background color -> font color for "highlight-<color>" named styles.
HIGHLIGHT_COLORS = {
    "red": "white",
    "yellow": "black",
    "blue": "white",
    "green": "white",
    "purple": "white"
}

# xlsxwriter spells some vertical alignments differently.
XLSX_VERTICAL_ALIGNMENTS = {
    CellVerticalAlignment.TOP: "top",
    CellVerticalAlignment.CENTER: "vcenter",
    CellVerticalAlignment.BOTTOM: "bottom",
    CellVerticalAlignment.JUSTIFY: "vjustify",
    CellVerticalAlignment.DISTRIBUTED: "vdistributed",
}


@dataclass(frozen=True)
class Style:
    """
    Immutable description of how the cells of a row are rendered.
    Fields left at None are not set: they take the value of the style merged under them,
    and fall back to Calibri 11 without bold, italic, underline or wrapping.
    Encoders that cannot render styles (CSV) ignore them.
    """
    font_name: Optional[str] = None
    font_size: Optional[int] = None
    font_color: Optional[str] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    wrap_text: Optional[bool] = None
    align: Optional[str] = None
    valign: Optional[str] = None
    bg_color: Optional[str] = None
    num_format: Optional[str] = None

    def __post_init__(self):
        if self.align is not None and not CellAlignment.is_valid(self.align):
            err_msg = f"Invalid cell alignment '{self.align}'. Valid values are {sorted(CellAlignment.VALID_ALIGNMENTS)}."
            logger.error(err_msg)
            raise InvalidArgumentError(err_msg)
        if self.valign is not None and not CellVerticalAlignment.is_valid(self.valign):
            err_msg = f"Invalid cell vertical alignment '{self.valign}'. Valid values are {sorted(CellVerticalAlignment.VALID_VERTICAL_ALIGNMENTS)}."
            logger.error(err_msg)
            raise InvalidArgumentError(err_msg)
        if self.font_size is not None and (isinstance(self.font_size, bool) or not isinstance(self.font_size, int) or self.font_size <= 0):
            err_msg = f"Font size must be a positive integer, got {self.font_size!r}."
            logger.error(err_msg)
            raise InvalidArgumentError(err_msg)

    @classmethod
    def from_name(cls, style_name: str) -> "Style":
        """
        Builds a style from a name such as 'general-red', 'percentage-blue-bold' or 'highlight-yellow'.
        Highlight styles use the 'General' number format to display varied data types naturally.

        :param style_name: The style name (case insensitive).
        :return: The matching Style.
        """
        if not isinstance(style_name, str):
            raise InvalidArgumentError(f"Style name must be a string, got {type(style_name).__name__}.")
        parts = style_name.lower().split("-")

        if parts[0] == "highlight" and len(parts) == 2 and parts[1] in HIGHLIGHT_COLORS:
            return cls(font_color=HIGHLIGHT_COLORS[parts[1]], bg_color=parts[1], align=CellAlignment.LEFT,
                       valign=CellVerticalAlignment.TOP, wrap_text=True, num_format="General")

        if parts[0] in VALID_NUMBER_FORMATS and len(parts) <= 3:
            color = None
            bold = False
            if len(parts) >= 2:
                if parts[1] not in FONT_COLORS:
                    raise InvalidArgumentError(f"Unknown font color '{parts[1]}' in style '{style_name}'.")
                color = parts[1]
            if len(parts) == 3:
                if parts[2] != "bold":
                    raise InvalidArgumentError(f"Unknown style modifier '{parts[2]}' in style '{style_name}'.")
                bold = True
            return cls(font_color=color, bold=bold, align=CellAlignment.LEFT, valign=CellVerticalAlignment.TOP,
                       wrap_text=True, num_format=VALID_NUMBER_FORMATS[parts[0]])

        err_msg = f"Invalid style name '{style_name}'."
        logger.error(err_msg)
        raise InvalidArgumentError(err_msg)

    def merge(self, base: "Style") -> "Style":
        """Returns base with every field this style sets (not None) applied on top of it."""
        overrides = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not None:
                overrides[field.name] = value
        return replace(base, **overrides)

    def to_format_properties(self) -> dict:
        """Returns the properties dictionary understood by xlsxwriter's Workbook.add_format()."""
        properties = {
            "font_name": self.font_name or DEFAULT_FONT_NAME,
            "font_size": self.font_size or DEFAULT_FONT_SIZE,
        }
        if self.font_color:
            properties["font_color"] = self.font_color
        if self.bold:
            properties["bold"] = True
        if self.italic:
            properties["italic"] = True
        if self.underline:
            properties["underline"] = 1
        if self.wrap_text:
            properties["text_wrap"] = True
        if self.align:
            properties["align"] = self.align
        if self.valign:
            properties["valign"] = XLSX_VERTICAL_ALIGNMENTS[self.valign]
        if self.bg_color:
            properties["bg_color"] = self.bg_color
        if self.num_format:
            properties["num_format"] = self.num_format
        return properties


def to_style(style) -> Optional[Style]:
    """Accepts None, a Style or a style name and returns a Style (or None)."""
    if style is None or isinstance(style, Style):
        return style
    if isinstance(style, str):
        return Style.from_name(style)
    err_msg = f"Style must be a Style, a style name or None, got {type(style).__name__}."
    logger.error(err_msg)
    raise InvalidArgumentError(err_msg)
