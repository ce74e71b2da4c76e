"""
Celery tasks for report generation.

A task either returns the exported file or fails; there is no partial
success state.
"""
from celery import shared_task

from .services import export_portfolio_report, export_visit_report


@shared_task(name='apps.reports.tasks.generate_visit_report')
def generate_visit_report(visit_id):
    """
    Generate a visit report PDF.

    Args:
        visit_id: Visit UUID (string)
    """
    result = export_visit_report(visit_id)
    return {'path': result.path, 'filename': result.filename}


@shared_task(name='apps.reports.tasks.generate_portfolio_report')
def generate_portfolio_report(portfolio_id):
    """
    Generate a portfolio report PDF.

    Args:
        portfolio_id: Portfolio UUID (string)
    """
    result = export_portfolio_report(portfolio_id)
    return {'path': result.path, 'filename': result.filename}
