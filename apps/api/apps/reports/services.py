"""
Report export services: build, render and atomically publish PDF files.
"""
import os
import tempfile
import time
from dataclasses import dataclass

from apps.clinical.utils_storage import get_export_dir
from apps.core.observability import log_domain_event, metrics

from .builders import build_portfolio_document, build_visit_document
from .compositor import ReportCompositor
from .document import PORTFOLIO_REPORT, VISIT_REPORT
from .exceptions import ReportNotFound, ReportSinkError


@dataclass(frozen=True)
class ExportResult:
    path: str
    filename: str


def _remove_quietly(path):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


def write_document(document, compositor=None):
    """
    Render a document into the export directory.

    Output goes to a temporary file next to the target and is moved into
    place only once the PDF is complete; on any failure the temporary file
    is removed and no file appears under the final name.

    Returns (ExportResult, RenderResult).
    """
    compositor = compositor or ReportCompositor()
    directory = get_export_dir()
    final_path = directory / document.filename

    fd, temp_path = tempfile.mkstemp(dir=directory, prefix='.tmp-', suffix='.pdf')
    try:
        try:
            with os.fdopen(fd, 'wb') as sink:
                render_result = compositor.render(document, sink)
            os.replace(temp_path, final_path)
        except OSError as exc:
            raise ReportSinkError(f'Could not write {document.kind} report') from exc
    except Exception:
        _remove_quietly(temp_path)
        raise

    return ExportResult(path=str(final_path), filename=document.filename), render_result


def _export(kind, record_id, build):
    start_time = time.time()
    try:
        document = build(record_id)
        export, render_result = write_document(document)
    except ReportNotFound:
        metrics.report_generation_total.labels(kind=kind, result='not_found').inc()
        log_domain_event(
            'report_generation_failed',
            entity_type=kind,
            entity_id=str(record_id),
            result='not_found',
        )
        raise
    except Exception as exc:
        metrics.report_generation_total.labels(kind=kind, result='failure').inc()
        log_domain_event(
            'report_generation_failed',
            entity_type=kind,
            entity_id=str(record_id),
            result='failure',
            error_type=type(exc).__name__,
        )
        raise
    finally:
        metrics.report_generation_duration_seconds.labels(kind=kind).observe(time.time() - start_time)

    metrics.report_generation_total.labels(kind=kind, result='success').inc()
    log_domain_event(
        'report_generated',
        entity_type=kind,
        entity_id=str(record_id),
        result='success',
        page_count=render_result.page_count,
        skipped_items=len(render_result.failures),
    )
    return export


def export_visit_report(visit_id) -> ExportResult:
    """
    Generate the PDF report for one visit.

    Raises ReportNotFound or ReportSinkError; item-level problems (missing
    photos, corrupt annotations, bad signatures) never fail the report.
    """
    return _export(VISIT_REPORT, visit_id, build_visit_document)


def export_portfolio_report(portfolio_id) -> ExportResult:
    """Generate the landscape before/after PDF for a portfolio."""
    return _export(PORTFOLIO_REPORT, portfolio_id, build_portfolio_document)
