"""
Page geometry, layout cursor and photo grid.

Offsets are measured in points from the top edge of the page; the compositor
converts them to PDF coordinates (origin bottom-left) when drawing.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional

from reportlab.lib.pagesizes import letter, landscape

PORTRAIT = 'portrait'
LANDSCAPE = 'landscape'


@dataclass(frozen=True)
class PageGeometry:
    width: float
    height: float
    margin: float

    @property
    def left(self):
        return self.margin

    @property
    def right(self):
        return self.width - self.margin

    @property
    def top(self):
        return self.margin

    @property
    def bottom(self):
        return self.height - self.margin

    @property
    def content_width(self):
        return self.width - 2 * self.margin

    def pdf_y(self, offset):
        """Convert a top-down offset into a PDF y coordinate."""
        return self.height - offset

    @classmethod
    def portrait_letter(cls):
        width, height = letter
        return cls(width=width, height=height, margin=50)

    @classmethod
    def landscape_letter(cls):
        width, height = landscape(letter)
        return cls(width=width, height=height, margin=40)

    @classmethod
    def for_orientation(cls, orientation):
        if orientation == LANDSCAPE:
            return cls.landscape_letter()
        return cls.portrait_letter()


class LayoutCursor:
    """
    Current page index and vertical offset.

    All page and row bookkeeping lives here; section renderers only call
    advance/would_overflow/new_page/move_to. `on_new_page` is invoked each
    time a page is closed so the drawing surface can follow.
    """

    def __init__(self, geometry: PageGeometry, on_new_page: Optional[Callable[[], None]] = None):
        self.geometry = geometry
        self.on_new_page = on_new_page
        self.page_index = 0
        self.offset = geometry.top

    @property
    def page_count(self):
        return self.page_index + 1

    @property
    def at_page_top(self):
        return self.offset <= self.geometry.top

    def would_overflow(self, height):
        return self.offset + height > self.geometry.bottom

    def new_page(self):
        if self.on_new_page is not None:
            self.on_new_page()
        self.page_index += 1
        self.offset = self.geometry.top

    def advance(self, height):
        """
        Reserve `height` points and return the offset where they start.

        Breaks to a new page first when the block would cross the bottom
        margin, unless the cursor is already at the top of a page.
        """
        if self.would_overflow(height) and not self.at_page_top:
            self.new_page()
        start = self.offset
        self.offset += height
        return start

    def move_to(self, offset):
        self.offset = offset


@dataclass(frozen=True)
class GridCell:
    page_index: int
    row: int
    column: int
    x: float
    top: float


class PhotoGridLayout:
    """
    Fixed 3-column photo grid.

    Rows wrap every `columns` cells. When a completed row leaves the row
    offset past `bottom_threshold`, the next placed cell opens a new page at
    the top margin; no page is opened if nothing else is placed.
    """
    columns = 3
    cell_width = 160
    cell_height = 120
    gap_x = 16
    gap_y = 30
    bottom_threshold = 650
    caption_gap = 2

    def __init__(self, cursor: LayoutCursor):
        self.cursor = cursor
        self.column = 0
        self.row = 0
        self.row_top = cursor.offset
        self.cells: List[GridCell] = []
        self._break_pending = False

    def place(self) -> GridCell:
        if self._break_pending:
            self.cursor.new_page()
            self.row_top = self.cursor.geometry.top
            self._break_pending = False

        cell = GridCell(
            page_index=self.cursor.page_index,
            row=self.row,
            column=self.column,
            x=self.cursor.geometry.left + self.column * (self.cell_width + self.gap_x),
            top=self.row_top,
        )
        self.cells.append(cell)

        self.column += 1
        if self.column >= self.columns:
            self.column = 0
            self.row += 1
            self.row_top += self.cell_height + self.gap_y
            if self.row_top > self.bottom_threshold:
                self._break_pending = True

        self.cursor.move_to(self.row_top if self.column == 0 else self.row_top + self.cell_height + self.gap_y)
        return cell

    def caption_top(self, cell):
        return cell.top + self.cell_height + self.caption_gap

    def row_sizes(self):
        """Number of cells in each row, in placement order."""
        sizes = []
        for cell in self.cells:
            if cell.row >= len(sizes):
                sizes.append(0)
            sizes[cell.row] += 1
        return sizes
