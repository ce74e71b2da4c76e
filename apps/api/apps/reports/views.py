"""
Report generation endpoints.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.permissions import IsClinicalStaff

from .exceptions import ReportNotFound, ReportSinkError
from .services import export_portfolio_report, export_visit_report

logger = logging.getLogger(__name__)


class BaseReportExportView(APIView):
    permission_classes = [IsClinicalStaff]
    not_found_message = 'Not found'

    def export(self, record_id):
        raise NotImplementedError

    def post(self, request, pk):
        try:
            result = self.export(pk)
        except ReportNotFound:
            return Response(
                {'error': self.not_found_message},
                status=status.HTTP_404_NOT_FOUND
            )
        except ReportSinkError:
            logger.error(
                "Report output could not be written",
                exc_info=True,
                extra={'user_id': str(request.user.id) if request.user else None}
            )
            return Response(
                {'error': 'Report could not be written'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(
            {'path': result.path, 'filename': result.filename},
            status=status.HTTP_201_CREATED
        )


class VisitReportExportView(BaseReportExportView):
    """
    POST /api/v1/reports/visits/{visit_id}/

    Generate the visit report PDF and return where it was written.
    """
    not_found_message = 'Visit not found'

    def export(self, record_id):
        return export_visit_report(record_id)


class PortfolioReportExportView(BaseReportExportView):
    """
    POST /api/v1/reports/portfolios/{portfolio_id}/

    Generate the landscape portfolio PDF.
    """
    not_found_message = 'Portfolio not found'

    def export(self, record_id):
        return export_portfolio_report(record_id)
