"""
Report document model: an ordered list of typed sections.

Builders produce a ReportDocument from the database; the compositor
consumes it without touching models.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .layout import LANDSCAPE, PORTRAIT

VISIT_REPORT = 'visit'
PORTFOLIO_REPORT = 'portfolio'


class SectionKind:
    TITLE = 'title'
    PATIENT_INFO = 'patient_info'
    VISIT_DETAIL = 'visit_detail'
    NOTES = 'notes'
    PHOTO_GRID = 'photo_grid'
    TREATMENT_LEDGER = 'treatment_ledger'
    ANNOTATION_SUMMARY = 'annotation_summary'
    CONSENTS = 'consents'
    PORTFOLIO_TITLE = 'portfolio_title'
    COMPARISON_PAGE = 'comparison_page'


# Sections that always open on a fresh page
PAGE_BREAK_BEFORE = frozenset({
    SectionKind.PHOTO_GRID,
    SectionKind.TREATMENT_LEDGER,
    SectionKind.ANNOTATION_SUMMARY,
    SectionKind.CONSENTS,
    SectionKind.COMPARISON_PAGE,
})


@dataclass(frozen=True)
class TitleBlock:
    title: str
    subtitle: str


@dataclass(frozen=True)
class InfoBlock:
    """Heading followed by one text row per line (patient info, visit details)."""
    heading: str
    lines: Tuple[str, ...]


@dataclass(frozen=True)
class NotesBlock:
    heading: str
    text: str


@dataclass(frozen=True)
class PhotoCell:
    record_id: str
    path: Optional[Path]
    caption: str


@dataclass(frozen=True)
class PhotoGrid:
    heading: str
    photos: Tuple[PhotoCell, ...]


@dataclass(frozen=True)
class AreaLine:
    name: str
    units: Optional[Decimal]
    cost: Optional[Decimal]


@dataclass(frozen=True)
class TreatmentEntry:
    record_id: str
    heading: str
    detail_lines: Tuple[str, ...]
    areas: Tuple[AreaLine, ...]
    total_units: Optional[Decimal]
    total_cost: Optional[Decimal]


@dataclass(frozen=True)
class TreatmentLedger:
    heading: str
    treatments: Tuple[TreatmentEntry, ...]
    provincial_tax_label: str
    provincial_tax_rate: Decimal
    federal_tax_label: str
    federal_tax_rate: Decimal


@dataclass(frozen=True)
class AnnotationRecord:
    record_id: str
    view: Optional[str]
    points_json: Optional[str]


@dataclass(frozen=True)
class AnnotatedTreatment:
    label: str
    annotations: Tuple[AnnotationRecord, ...]


@dataclass(frozen=True)
class AnnotationSummary:
    heading: str
    treatments: Tuple[AnnotatedTreatment, ...]


@dataclass(frozen=True)
class ConsentEntry:
    record_id: str
    consent_type: str
    signed_at: Optional[str]
    signature_data: Optional[str]


@dataclass(frozen=True)
class ConsentList:
    heading: str
    consents: Tuple[ConsentEntry, ...]


@dataclass(frozen=True)
class PortfolioTitle:
    title: str
    category: Optional[str]
    pair_count: int


@dataclass(frozen=True)
class ComparisonPage:
    record_id: str
    patient_name: str
    before_label: str
    after_label: str
    before_path: Optional[Path]
    after_path: Optional[Path]
    caption: str


@dataclass(frozen=True)
class Section:
    kind: str
    payload: Any


@dataclass
class ReportDocument:
    kind: str
    orientation: str
    sections: List[Section] = field(default_factory=list)
    filename: str = ''

    def add(self, kind, payload):
        self.sections.append(Section(kind, payload))
        return self

    def section_kinds(self):
        return [section.kind for section in self.sections]

    @classmethod
    def visit_report(cls, filename=''):
        return cls(kind=VISIT_REPORT, orientation=PORTRAIT, filename=filename)

    @classmethod
    def portfolio_report(cls, filename=''):
        return cls(kind=PORTFOLIO_REPORT, orientation=LANDSCAPE, filename=filename)
