"""
ReportCompositor: single-pass, forward-only PDF layout with reportlab.

Every text row goes through the layout cursor and is recorded in the render
transcript, which is what the tests and the generation log look at.
"""
import base64
import binascii
import io
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from PIL import Image
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas as canvas_module

from apps.clinical.costs import format_money, format_number, rollup, summary_lines, to_decimal

from .annotations import FALLBACK_LINE, summarize_annotation
from .document import PAGE_BREAK_BEFORE, SectionKind
from .exceptions import MissingAsset, ReportSinkError
from .layout import LayoutCursor, PageGeometry, PhotoGridLayout
from .recovery import ItemFailure, recover_each

FONT = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'
LINE_SPACING = 1.35

TEXT_COLOR = colors.black
MUTED_COLOR = colors.HexColor('#666666')
DETAIL_COLOR = colors.HexColor('#444444')
FAINT_COLOR = colors.HexColor('#999999')
DIVIDER_COLOR = colors.HexColor('#cccccc')
LIGHT_DIVIDER_COLOR = colors.HexColor('#eeeeee')

SIGNATURE_PREFIX = 'data:image/png;base64,'
SIGNATURE_WIDTH = 200
SIGNATURE_HEIGHT = 60

COMPARISON_IMAGE_WIDTH = 330
COMPARISON_IMAGE_HEIGHT = 380
COMPARISON_IMAGE_GAP = 42


@dataclass(frozen=True)
class RenderedLine:
    page_index: int
    text: str


@dataclass(frozen=True)
class PlacedPhoto:
    record_id: str
    page_index: int
    row: int
    column: int
    caption: str


@dataclass
class RenderResult:
    page_count: int
    lines: List[RenderedLine] = field(default_factory=list)
    photo_cells: List[PlacedPhoto] = field(default_factory=list)
    failures: List[ItemFailure] = field(default_factory=list)

    def texts(self):
        return [line.text for line in self.lines]

    def texts_on_page(self, page_index):
        return [line.text for line in self.lines if line.page_index == page_index]


def load_image(path):
    """
    Decode an image file for embedding.

    Raises MissingAsset when the file is absent or not a readable image.
    """
    if path is None or not path.is_file():
        raise MissingAsset('Image file not found')
    try:
        with Image.open(path) as img:
            img.load()
            image = img.convert('RGB') if img.mode not in ('RGB', 'L') else img.copy()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise MissingAsset('Image file could not be decoded') from exc
    return ImageReader(image)


def decode_signature(signature_data):
    """Decode a PNG data URL into an embeddable image; raises MissingAsset."""
    encoded = signature_data[len(SIGNATURE_PREFIX):]
    try:
        raw = base64.b64decode(encoded, validate=True)
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            image = img.convert('RGBA') if img.mode not in ('RGB', 'RGBA', 'L') else img.copy()
    except (binascii.Error, OSError, ValueError, Image.DecompressionBombError) as exc:
        raise MissingAsset('Signature image could not be embedded') from exc
    return ImageReader(image)


class ReportCompositor:
    """
    Render a ReportDocument onto a binary sink.

    Usage:
        result = ReportCompositor().render(document, open(path, 'wb'))
    """

    def __init__(self, geometry: Optional[PageGeometry] = None):
        self.geometry = geometry
        self._renderers = {
            SectionKind.TITLE: self._render_title,
            SectionKind.PATIENT_INFO: self._render_info,
            SectionKind.VISIT_DETAIL: self._render_info,
            SectionKind.NOTES: self._render_notes,
            SectionKind.PHOTO_GRID: self._render_photo_grid,
            SectionKind.TREATMENT_LEDGER: self._render_treatment_ledger,
            SectionKind.ANNOTATION_SUMMARY: self._render_annotation_summary,
            SectionKind.CONSENTS: self._render_consents,
            SectionKind.PORTFOLIO_TITLE: self._render_portfolio_title,
            SectionKind.COMPARISON_PAGE: self._render_comparison_page,
        }

    def render(self, document, sink) -> RenderResult:
        geometry = self.geometry or PageGeometry.for_orientation(document.orientation)
        self._geometry = geometry
        self._report_kind = document.kind
        self._canvas = canvas_module.Canvas(sink, pagesize=(geometry.width, geometry.height))
        self._canvas.setTitle(document.filename or document.kind)
        self._cursor = LayoutCursor(geometry, on_new_page=self._canvas.showPage)
        self._result = RenderResult(page_count=1)

        for index, section in enumerate(document.sections):
            if index > 0 and section.kind in PAGE_BREAK_BEFORE:
                self._cursor.new_page()
            self._renderers[section.kind](section.payload)

        try:
            self._canvas.save()
        except OSError as exc:
            raise ReportSinkError('Could not write report output') from exc

        self._result.page_count = self._cursor.page_count
        return self._result

    # ------------------------------------------------------------------
    # Drawing primitives
    # ------------------------------------------------------------------

    def _text(self, text, size=10, font=FONT, color=TEXT_COLOR, align='left', x=None):
        leading = size * LINE_SPACING
        top = self._cursor.advance(leading)
        self._draw_string(text, top, size, font, color, align, x)

    def _draw_string(self, text, top, size, font, color, align='left', x=None):
        baseline = self._geometry.pdf_y(top + size)
        c = self._canvas
        c.setFont(font, size)
        c.setFillColor(color)
        if align == 'center':
            c.drawCentredString(self._geometry.width / 2, baseline, text)
        elif align == 'right':
            c.drawRightString(self._geometry.right, baseline, text)
        else:
            c.drawString(self._geometry.left if x is None else x, baseline, text)
        self._result.lines.append(RenderedLine(self._cursor.page_index, text))

    def _wrapped(self, text, size=10, font=FONT, color=TEXT_COLOR):
        for paragraph in text.split('\n'):
            if not paragraph.strip():
                self._gap(size * LINE_SPACING)
                continue
            for line in simpleSplit(paragraph, font, size, self._geometry.content_width):
                self._text(line, size=size, font=font, color=color)

    def _heading(self, text, size=14):
        self._text(text, size=size, font=FONT_BOLD)
        self._gap(6)

    def _gap(self, height):
        self._cursor.move_to(self._cursor.offset + height)

    def _divider(self, color=DIVIDER_COLOR):
        y = self._geometry.pdf_y(self._cursor.offset)
        c = self._canvas
        c.setStrokeColor(color)
        c.setLineWidth(0.5)
        c.line(self._geometry.left, y, self._geometry.right, y)

    def _image(self, reader, x, top, width, height):
        self._canvas.drawImage(
            reader,
            x,
            self._geometry.pdf_y(top + height),
            width=width,
            height=height,
            preserveAspectRatio=True,
            anchor='c',
            mask='auto',
        )

    def _recover(self, items, render, element, **kwargs):
        failures = recover_each(
            items,
            render,
            report_kind=self._report_kind,
            element=element,
            **kwargs
        )
        self._result.failures.extend(failures)
        return failures

    # ------------------------------------------------------------------
    # Visit report sections
    # ------------------------------------------------------------------

    def _render_title(self, block):
        self._text(block.title, size=20, font=FONT_BOLD, align='center')
        self._gap(4)
        self._text(block.subtitle, size=10, color=MUTED_COLOR, align='center')
        self._gap(12)
        self._divider()
        self._gap(12)

    def _render_info(self, block):
        self._heading(block.heading)
        for line in block.lines:
            self._text(line)
        self._gap(12)

    def _render_notes(self, block):
        self._heading(block.heading)
        self._wrapped(block.text)
        self._gap(12)

    def _render_photo_grid(self, grid_block):
        self._heading(grid_block.heading)
        self._gap(4)
        grid = PhotoGridLayout(self._cursor)

        def place(photo):
            # Decode before claiming a cell so a bad file leaves no gap or caption
            reader = load_image(photo.path)
            cell = grid.place()
            self._image(reader, cell.x, cell.top, grid.cell_width, grid.cell_height)
            if photo.caption:
                self._canvas.setFont(FONT, 7)
                self._canvas.setFillColor(TEXT_COLOR)
                self._canvas.drawCentredString(
                    cell.x + grid.cell_width / 2,
                    self._geometry.pdf_y(grid.caption_top(cell) + 7),
                    photo.caption,
                )
                self._result.lines.append(RenderedLine(cell.page_index, photo.caption))
            self._result.photo_cells.append(PlacedPhoto(
                record_id=photo.record_id,
                page_index=cell.page_index,
                row=cell.row,
                column=cell.column,
                caption=photo.caption,
            ))

        self._recover(grid_block.photos, place, element='photo')

    def _render_treatment_ledger(self, ledger):
        self._heading(ledger.heading)
        subtotal = Decimal('0')

        for entry in ledger.treatments:
            self._text(entry.heading, size=11, font=FONT_BOLD)
            for line in entry.detail_lines:
                self._text(line, size=9, color=DETAIL_COLOR)
            for area in entry.areas:
                self._text(
                    f"  {area.name}: {format_number(area.units)} units — {format_money(area.cost)}",
                    size=9,
                    color=DETAIL_COLOR,
                )
            self._text(
                f"Total: {format_number(entry.total_units)} units — {format_money(entry.total_cost)}",
                size=9,
                font=FONT_BOLD,
            )
            subtotal += to_decimal(entry.total_cost)
            self._gap(6)
            self._divider(LIGHT_DIVIDER_COLOR)
            self._gap(6)

        summary = rollup(subtotal, ledger.provincial_tax_rate, ledger.federal_tax_rate)
        lines = summary_lines(
            summary,
            ledger.provincial_tax_label,
            ledger.provincial_tax_rate,
            ledger.federal_tax_label,
            ledger.federal_tax_rate,
        )
        self._gap(6)
        for line in lines[:-1]:
            self._text(line, align='right')
        self._text(lines[-1], font=FONT_BOLD, align='right')

    def _render_annotation_summary(self, block):
        self._heading(block.heading)

        def render_annotation(record):
            # Summarize fully before drawing so a bad record draws nothing
            for line in summarize_annotation(record.view, record.points_json):
                self._text(line, size=9)

        def fallback(record, error):
            self._text(FALLBACK_LINE, size=9)

        for treatment in block.treatments:
            self._text(treatment.label, size=11, font=FONT_BOLD)
            self._gap(2)
            self._recover(treatment.annotations, render_annotation, element='annotation', fallback=fallback)
            self._gap(8)

    def _render_consents(self, block):
        self._heading(block.heading)

        def embed_signature(consent):
            reader = decode_signature(consent.signature_data)
            top = self._cursor.advance(8 + SIGNATURE_HEIGHT) + 8
            self._image(reader, self._geometry.left, top, SIGNATURE_WIDTH, SIGNATURE_HEIGHT)

        for consent in block.consents:
            self._text(f"Type: {consent.consent_type}", size=11, font=FONT_BOLD)
            if consent.signed_at:
                self._text(f"Signed: {consent.signed_at}", size=9)
            if consent.signature_data and consent.signature_data.startswith(SIGNATURE_PREFIX):
                self._recover([consent], embed_signature, element='consent_signature')
            self._gap(10)

    # ------------------------------------------------------------------
    # Portfolio report sections
    # ------------------------------------------------------------------

    def _render_portfolio_title(self, block):
        self._text(block.title, size=24, font=FONT_BOLD, align='center')
        self._gap(6)
        if block.category:
            self._text(block.category, size=12, color=MUTED_COLOR, align='center')
        self._gap(6)
        self._text(f"{block.pair_count} comparison pair(s)", size=10, color=FAINT_COLOR, align='center')

    def _render_comparison_page(self, page):
        geometry = self._geometry
        left_x = geometry.left
        right_x = geometry.left + COMPARISON_IMAGE_WIDTH + COMPARISON_IMAGE_GAP

        self._text(page.patient_name, size=12, font=FONT_BOLD, align='center')
        self._gap(4)

        label_top = self._cursor.advance(9 * LINE_SPACING)
        self._draw_string(page.before_label, label_top, 9, FONT, MUTED_COLOR, x=left_x)
        self._draw_string(page.after_label, label_top, 9, FONT, MUTED_COLOR, x=right_x)
        photo_top = self._cursor.offset + 4

        def draw_side(side):
            path, x = side
            reader = load_image(path)
            self._image(reader, x, photo_top, COMPARISON_IMAGE_WIDTH, COMPARISON_IMAGE_HEIGHT)

        sides = [(path, x) for path, x in ((page.before_path, left_x), (page.after_path, right_x)) if path]
        self._recover(sides, draw_side, element='photo', record_id=lambda side: page.record_id)

        self._cursor.move_to(photo_top + COMPARISON_IMAGE_HEIGHT + 8)
        if page.caption:
            self._text(page.caption, size=8, color=FAINT_COLOR, align='center')
