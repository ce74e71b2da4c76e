"""
Report document builders.

Read the clinical models and assemble the section list the compositor
renders. Missing visits, patients and portfolios fail here, before any
output is opened.
"""
import re

from django.conf import settings

from apps.clinical.models import Portfolio, Visit
from apps.clinical.pairing import first_photo_for_item, visit_photos
from apps.clinical.utils_storage import resolve_photo_path
from apps.core.models import AppSettings

from .document import (
    AnnotatedTreatment, AnnotationRecord, AnnotationSummary, AreaLine,
    ComparisonPage, ConsentEntry, ConsentList, InfoBlock, NotesBlock,
    PhotoCell, PhotoGrid, PortfolioTitle, ReportDocument, SectionKind,
    TitleBlock, TreatmentEntry, TreatmentLedger,
)
from .exceptions import ReportNotFound
from .markup import strip_markup

_UNSAFE_FILENAME_CHARS_RE = re.compile(r'[^A-Za-z0-9_\- ]')
_WHITESPACE_RE = re.compile(r'\s+')


def sanitize_filename(name):
    """Keep [A-Za-z0-9_- ] and turn whitespace runs into hyphens."""
    return _WHITESPACE_RE.sub('-', _UNSAFE_FILENAME_CHARS_RE.sub('', name or ''))


def visit_report_filename(patient, visit):
    patient_name = sanitize_filename(f"{patient.first_name}-{patient.last_name}")
    return f"visit-report-{patient_name}-{visit.date.isoformat()}.pdf"


def portfolio_report_filename(portfolio):
    return f"portfolio-{sanitize_filename(portfolio.title or 'portfolio')}.pdf"


def _format_date(value):
    return value.isoformat() if value else None


def patient_info_lines(patient):
    """Name always; the remaining lines only when the field is filled."""
    lines = [f"Name: {patient.first_name} {patient.last_name}"]
    if patient.birth_date:
        lines.append(f"Date of Birth: {patient.birth_date.isoformat()}")
    if patient.sex:
        lines.append(f"Sex: {patient.sex}")
    if patient.ethnicity:
        lines.append(f"Ethnicity: {patient.ethnicity}")
    if patient.email:
        lines.append(f"Email: {patient.email}")
    if patient.phone:
        lines.append(f"Phone: {patient.phone}")
    if patient.city:
        location = f"{patient.city}, {patient.province}" if patient.province else patient.city
        lines.append(f"City: {location}")
    return tuple(lines)


def visit_detail_lines(visit):
    lines = [f"Date: {visit.date.isoformat()}"]
    if visit.time:
        lines.append(f"Time: {visit.time.strftime('%H:%M')}")
    if visit.practitioner_id:
        lines.append(f"Practitioner: {visit.practitioner.display_name}")
    return tuple(lines)


def _treatment_entry(treatment):
    details = []
    if treatment.treatment_type:
        details.append(f"Type: {treatment.treatment_type}")
    if treatment.lot_number:
        details.append(f"Lot #: {treatment.lot_number}")
    if treatment.expiry_date:
        details.append(f"Expiry: {treatment.expiry_date.isoformat()}")

    areas = tuple(
        AreaLine(
            name=area.treated_area.name if area.treated_area_id else 'Area',
            units=area.units,
            cost=area.cost,
        )
        for area in treatment.areas.all()
    )
    return TreatmentEntry(
        record_id=str(treatment.id),
        heading=treatment.label,
        detail_lines=tuple(details),
        areas=areas,
        total_units=treatment.total_units,
        total_cost=treatment.total_cost,
    )


def build_visit_document(visit_id) -> ReportDocument:
    """
    Assemble the visit report.

    Raises ReportNotFound when the visit or its patient is missing or
    soft-deleted.
    """
    try:
        visit = (
            Visit.objects
            .select_related('patient', 'practitioner')
            .get(id=visit_id, is_deleted=False)
        )
    except Visit.DoesNotExist:
        raise ReportNotFound(f'Visit {visit_id} not found')

    patient = visit.patient
    if patient.is_deleted:
        raise ReportNotFound(f'Patient for visit {visit_id} not found')

    app_settings = AppSettings.load()
    document = ReportDocument.visit_report(filename=visit_report_filename(patient, visit))

    document.add(SectionKind.TITLE, TitleBlock(
        title=app_settings.clinic_name or settings.DEFAULT_CLINIC_NAME,
        subtitle='Visit Report',
    ))
    document.add(SectionKind.PATIENT_INFO, InfoBlock('Patient Information', patient_info_lines(patient)))
    document.add(SectionKind.VISIT_DETAIL, InfoBlock('Visit Details', visit_detail_lines(visit)))

    notes = strip_markup(visit.clinical_notes)
    if notes:
        document.add(SectionKind.NOTES, NotesBlock('Clinical Notes', notes))

    photos = visit_photos(visit.id)
    if photos:
        document.add(SectionKind.PHOTO_GRID, PhotoGrid('Photos', tuple(
            PhotoCell(
                record_id=str(photo.id),
                path=resolve_photo_path(photo.original_path),
                caption=photo.caption,
            )
            for photo in photos
        )))

    treatments = list(
        visit.treatments
        .filter(is_deleted=False)
        .select_related('product')
        .prefetch_related('areas__treated_area', 'annotations')
        .order_by('created_at')
    )
    if treatments:
        document.add(SectionKind.TREATMENT_LEDGER, TreatmentLedger(
            heading='Treatment Records',
            treatments=tuple(_treatment_entry(treatment) for treatment in treatments),
            provincial_tax_label=app_settings.provincial_tax_label,
            provincial_tax_rate=app_settings.provincial_tax_rate,
            federal_tax_label=app_settings.federal_tax_label,
            federal_tax_rate=app_settings.federal_tax_rate,
        ))

    annotated = tuple(
        AnnotatedTreatment(
            label=treatment.label,
            annotations=tuple(
                AnnotationRecord(
                    record_id=str(annotation.id),
                    view=annotation.diagram_view,
                    points_json=annotation.points_json,
                )
                for annotation in sorted(treatment.annotations.all(), key=lambda a: a.created_at)
            ),
        )
        for treatment in treatments
        if treatment.annotations.all()
    )
    if annotated:
        document.add(SectionKind.ANNOTATION_SUMMARY, AnnotationSummary('Injection Site Maps', annotated))

    consents = list(visit.consents.order_by('created_at'))
    if consents:
        document.add(SectionKind.CONSENTS, ConsentList('Consent Records', tuple(
            ConsentEntry(
                record_id=str(consent.id),
                consent_type=consent.consent_type,
                signed_at=consent.signed_at.strftime('%Y-%m-%d %H:%M') if consent.signed_at else None,
                signature_data=consent.signature_data,
            )
            for consent in consents
        )))

    return document


def _live_visit(visit):
    if visit is None or visit.is_deleted:
        return None
    return visit


def build_portfolio_document(portfolio_id) -> ReportDocument:
    """
    Assemble the landscape portfolio report, one comparison per page.

    Items are listed newest first.
    """
    try:
        portfolio = Portfolio.objects.get(id=portfolio_id, is_deleted=False)
    except Portfolio.DoesNotExist:
        raise ReportNotFound(f'Portfolio {portfolio_id} not found')

    items = list(
        portfolio.items
        .filter(patient__is_deleted=False)
        .select_related('patient', 'before_visit', 'after_visit')
        .order_by('-created_at')
    )

    document = ReportDocument.portfolio_report(filename=portfolio_report_filename(portfolio))
    document.add(SectionKind.PORTFOLIO_TITLE, PortfolioTitle(
        title=portfolio.title,
        category=portfolio.category,
        pair_count=len(items),
    ))

    for item in items:
        before_visit = _live_visit(item.before_visit)
        after_visit = _live_visit(item.after_visit)
        before_photo = first_photo_for_item(
            before_visit.id if before_visit else None, item.photo_position, item.photo_state
        )
        after_photo = first_photo_for_item(
            after_visit.id if after_visit else None, item.photo_position, item.photo_state
        )
        document.add(SectionKind.COMPARISON_PAGE, ComparisonPage(
            record_id=str(item.id),
            patient_name=item.patient.full_name,
            before_label=f"Before: {_format_date(before_visit.date) if before_visit else 'N/A'}",
            after_label=f"After: {_format_date(after_visit.date) if after_visit else 'N/A'}",
            before_path=resolve_photo_path(before_photo.original_path) if before_photo else None,
            after_path=resolve_photo_path(after_photo.original_path) if after_photo else None,
            caption=item.photo_position or '',
        ))

    return document
