"""
Clinical API views: case search, visit photo comparison, cost preview.
"""
import logging
import uuid

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.authz.permissions import IsClinicalStaff
from apps.clinical.case_search import search_cases
from apps.clinical.costs import rollup, summary_lines
from apps.clinical.models import Visit
from apps.clinical.pairing import compare_visit_photos
from apps.core.models import AppSettings

from .serializers import (
    CaseResultSerializer,
    CaseSearchFilterSerializer,
    ComparisonPairSerializer,
    CostPreviewRequestSerializer,
    CostSummarySerializer,
)

logger = logging.getLogger(__name__)


class CaseSearchView(APIView):
    """
    POST /api/v1/clinical/case-search/

    Find patients matching a set of optional criteria. An empty body returns
    every active patient, ordered by name and capped.

    Response:
    {
        "count": 2,
        "results": [{"patient_id": "...", "visit_count": 3, ...}]
    }
    """
    permission_classes = [IsClinicalStaff]

    def post(self, request):
        serializer = CaseSearchFilterSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(
                serializer.errors,
                status=status.HTTP_400_BAD_REQUEST
            )

        results = search_cases(serializer.to_search_filter())

        return Response({
            'count': len(results),
            'results': CaseResultSerializer(results, many=True).data,
        })


class VisitPhotoComparisonView(APIView):
    """
    GET /api/v1/clinical/visits/compare/?before={visit_id}&after={visit_id}

    Pair the photos of two visits by position and state.
    """
    permission_classes = [IsClinicalStaff]

    def get(self, request):
        visit_ids = {}
        for param in ('before', 'after'):
            value = request.query_params.get(param, '').strip()
            if not value:
                return Response(
                    {'error': f'Query parameter "{param}" is required'},
                    status=status.HTTP_400_BAD_REQUEST
                )
            try:
                visit_ids[param] = uuid.UUID(value)
            except ValueError:
                return Response(
                    {'error': f'Query parameter "{param}" must be a visit UUID'},
                    status=status.HTTP_400_BAD_REQUEST
                )

        try:
            pairs = compare_visit_photos(visit_ids['before'], visit_ids['after'])
        except Visit.DoesNotExist:
            return Response(
                {'error': 'Visit not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        logger.info(
            "Visit photo comparison",
            extra={
                'event': 'visit_photos_compared',
                'before_visit_id': str(visit_ids['before']),
                'after_visit_id': str(visit_ids['after']),
                'pair_count': len(pairs),
            }
        )

        return Response(ComparisonPairSerializer(pairs, many=True).data)


class CostPreviewView(APIView):
    """
    POST /api/v1/clinical/cost-preview/

    Live tax/total preview for a subtotal using the clinic's configured
    tax rates. Same math as the visit report ledger.

    Body: {"subtotal": "100.00"}
    """
    permission_classes = [IsClinicalStaff]

    def post(self, request):
        serializer = CostPreviewRequestSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(
                serializer.errors,
                status=status.HTTP_400_BAD_REQUEST
            )

        app_settings = AppSettings.load()
        summary = rollup(
            serializer.validated_data['subtotal'],
            app_settings.provincial_tax_rate,
            app_settings.federal_tax_rate,
        )
        data = {
            'subtotal': summary.subtotal,
            'provincial_tax': summary.provincial_tax,
            'federal_tax': summary.federal_tax,
            'total': summary.total,
            'provincial_tax_label': app_settings.provincial_tax_label,
            'provincial_tax_rate': app_settings.provincial_tax_rate,
            'federal_tax_label': app_settings.federal_tax_label,
            'federal_tax_rate': app_settings.federal_tax_rate,
            'lines': summary_lines(
                summary,
                app_settings.provincial_tax_label,
                app_settings.provincial_tax_rate,
                app_settings.federal_tax_label,
                app_settings.federal_tax_rate,
            ),
        }
        return Response(CostSummarySerializer(data).data)
