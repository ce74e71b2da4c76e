"""
Case search compiler: folds predicates into one bounded, ordered query.
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from django.conf import settings
from django.db.models import OuterRef

from apps.clinical.models import Patient, Treatment, Visit
from apps.core.observability import log_domain_event, metrics

from .predicates import build_predicates, related_count


@dataclass(frozen=True)
class CaseResult:
    patient_id: str
    first_name: str
    last_name: str
    sex: Optional[str]
    birth_date: Optional[date]
    ethnicity: Optional[str]
    city: Optional[str]
    province: Optional[str]
    visit_count: int
    treatment_count: int


def compile_predicates(predicates, limit=None):
    """
    AND every predicate into one Patient queryset.

    Rows are annotated with visit_count and treatment_count (non-deleted
    children only), ordered by last name, first name and id, and capped.
    """
    if limit is None:
        limit = settings.CASE_SEARCH_RESULT_LIMIT

    queryset = Patient.objects.all()
    for predicate in predicates:
        queryset = queryset.filter(predicate.compile())

    visits = Visit.objects.filter(patient=OuterRef('pk'), is_deleted=False)
    treatments = Treatment.objects.filter(
        visit__patient=OuterRef('pk'),
        visit__is_deleted=False,
        is_deleted=False,
    )

    return (
        queryset
        .annotate(
            visit_count=related_count(visits, 'patient'),
            treatment_count=related_count(treatments, 'visit__patient'),
        )
        .order_by('last_name', 'first_name', 'id')[:limit]
    )


@metrics.track_duration(metrics.case_search_duration_seconds)
def search_cases(search_filter, today=None) -> List[CaseResult]:
    """
    Run a case search.

    An empty filter is valid and returns every non-deleted patient.
    """
    predicates = build_predicates(search_filter, today=today)
    try:
        rows = compile_predicates(predicates).values_list(
            'id', 'first_name', 'last_name', 'sex', 'birth_date',
            'ethnicity', 'city', 'province', 'visit_count', 'treatment_count',
        )
        results = [
            CaseResult(
                patient_id=str(row[0]),
                first_name=row[1],
                last_name=row[2],
                sex=row[3],
                birth_date=row[4],
                ethnicity=row[5],
                city=row[6],
                province=row[7],
                visit_count=row[8],
                treatment_count=row[9],
            )
            for row in rows
        ]
    except Exception:
        metrics.case_search_total.labels(result='failure').inc()
        raise

    metrics.case_search_total.labels(result='success').inc()
    # Field names only; filter values may identify patients
    log_domain_event(
        'case_search_executed',
        entity_type='Patient',
        result='success',
        filter_fields=search_filter.present_fields(),
        predicate_count=len(predicates),
        result_count=len(results),
    )
    return results
