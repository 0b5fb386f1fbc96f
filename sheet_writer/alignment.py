
class CellVerticalAlignment:
    """
    Constants for the vertical alignment of text in a cell.
    is_valid() is total: anything that is not one of the constants is simply not valid.
    """
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"
    JUSTIFY = "justify"
    DISTRIBUTED = "distributed"

    VALID_VERTICAL_ALIGNMENTS = frozenset([TOP, CENTER, BOTTOM, JUSTIFY, DISTRIBUTED])

    @classmethod
    def is_valid(cls, vertical_alignment) -> bool:
        """
        :param vertical_alignment: Candidate alignment token.
        :return: True if the token is a recognized vertical alignment.
        """
        if not isinstance(vertical_alignment, str):
            return False
        return vertical_alignment in cls.VALID_VERTICAL_ALIGNMENTS


class CellAlignment:
    """Constants for the horizontal alignment of text in a cell."""
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFY = "justify"

    VALID_ALIGNMENTS = frozenset([LEFT, RIGHT, CENTER, JUSTIFY])

    @classmethod
    def is_valid(cls, alignment) -> bool:
        if not isinstance(alignment, str):
            return False
        return alignment in cls.VALID_ALIGNMENTS
