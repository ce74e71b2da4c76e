"""
Tests for the layout cursor and the photo grid.
"""
from apps.reports.layout import LayoutCursor, PageGeometry, PhotoGridLayout


def make_cursor(offset=None):
    pages_closed = []
    cursor = LayoutCursor(PageGeometry.portrait_letter(), on_new_page=lambda: pages_closed.append(1))
    if offset is not None:
        cursor.move_to(offset)
    return cursor, pages_closed


class TestPageGeometry:

    def test_portrait_letter(self):
        geometry = PageGeometry.portrait_letter()
        assert (geometry.width, geometry.height) == (612, 792)
        assert geometry.top == 50
        assert geometry.bottom == 742
        assert geometry.content_width == 512

    def test_landscape_letter(self):
        geometry = PageGeometry.for_orientation('landscape')
        assert (geometry.width, geometry.height) == (792, 612)
        assert geometry.left == 40

    def test_pdf_y_flips_axis(self):
        assert PageGeometry.portrait_letter().pdf_y(50) == 742


class TestLayoutCursor:

    def test_advance_returns_start_offset(self):
        cursor, _ = make_cursor()
        assert cursor.advance(20) == 50
        assert cursor.offset == 70

    def test_advance_breaks_page_on_overflow(self):
        cursor, pages_closed = make_cursor(offset=730)

        start = cursor.advance(20)

        assert start == 50
        assert cursor.page_index == 1
        assert pages_closed == [1]

    def test_oversized_block_at_page_top_does_not_break(self):
        cursor, pages_closed = make_cursor()

        cursor.advance(1000)

        assert cursor.page_index == 0
        assert pages_closed == []

    def test_page_count(self):
        cursor, _ = make_cursor()
        cursor.new_page()
        cursor.new_page()
        assert cursor.page_count == 3


class TestPhotoGridLayout:

    def test_seven_photos_fill_rows_of_three(self):
        cursor, _ = make_cursor(offset=100)
        grid = PhotoGridLayout(cursor)

        cells = [grid.place() for _ in range(7)]

        assert grid.row_sizes() == [3, 3, 1]
        assert [cell.x for cell in cells[:3]] == [50, 226, 402]
        assert [cell.top for cell in cells[::3]] == [100, 250, 400]

    def test_cursor_ends_below_partial_row(self):
        cursor, _ = make_cursor(offset=100)
        grid = PhotoGridLayout(cursor)

        for _ in range(4):
            grid.place()

        assert cursor.offset == 250 + 150

    def test_thirteenth_photo_opens_second_page(self):
        cursor, pages_closed = make_cursor(offset=75)
        grid = PhotoGridLayout(cursor)

        cells = [grid.place() for _ in range(13)]

        assert all(cell.page_index == 0 for cell in cells[:12])
        assert cells[12].page_index == 1
        assert cells[12].top == 50
        assert cells[12].column == 0
        assert cursor.page_count == 2
        assert pages_closed == [1]

    def test_full_page_without_more_photos_adds_no_page(self):
        cursor, pages_closed = make_cursor(offset=75)
        grid = PhotoGridLayout(cursor)

        for _ in range(12):
            grid.place()

        assert cursor.page_count == 1
        assert pages_closed == []

    def test_caption_sits_below_cell(self):
        cursor, _ = make_cursor(offset=100)
        grid = PhotoGridLayout(cursor)

        cell = grid.place()

        assert grid.caption_top(cell) == 222
