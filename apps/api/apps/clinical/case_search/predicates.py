"""
Case search predicates.

Each predicate is an independent, immutable condition over Patient rows.
The builder turns a SearchFilter into an ordered list of predicates which
the compiler ANDs together; there is no OR/NOT, dropping a field is the only
way to relax the search.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, Tuple

from django.db.models import Exists as ExistsExpression
from django.db.models import Count, IntegerField, OuterRef, Q, Subquery, Value
from django.db.models.functions import Coalesce
from django.db.models.lookups import GreaterThanOrEqual
from django.utils import timezone

from apps.clinical.models import (
    Consent, ConsentTypeChoices, Treatment, TreatmentArea, Visit,
)


def years_before(today, years):
    """
    Calendar date N years before today.

    Feb 29 in a non-leap target year rolls forward to Mar 1. Spans reaching
    past the first representable year clamp to date.min.
    """
    if today.year - years < date.min.year:
        return date.min
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return date(today.year - years, 3, 1)


class Predicate:
    """Base class for search predicates."""

    def compile(self):
        """Return a Q object or boolean expression usable in QuerySet.filter()."""
        raise NotImplementedError

    @property
    def params(self):
        """Values bound into the compiled condition."""
        raise NotImplementedError


@dataclass(frozen=True)
class Equality(Predicate):
    field: str
    value: Any

    def compile(self):
        return Q(**{self.field: self.value})

    @property
    def params(self):
        return (self.value,)


@dataclass(frozen=True)
class Range(Predicate):
    """Inclusive lower and/or upper bound on a field."""
    field: str
    lower: Any = None
    upper: Any = None

    def compile(self):
        q = Q()
        if self.lower is not None:
            q &= Q(**{f'{self.field}__gte': self.lower})
        if self.upper is not None:
            q &= Q(**{f'{self.field}__lte': self.upper})
        return q

    @property
    def params(self):
        return tuple(v for v in (self.lower, self.upper) if v is not None)


@dataclass(frozen=True)
class TemporalRange(Predicate):
    """
    Compare a date field with the date N years before today.

    on_or_before=True  -> field <= cutoff  (at least N years ago)
    on_or_before=False -> field >  cutoff  (strictly less than N years ago)
    """
    field: str
    years: int
    today: date
    on_or_before: bool = True

    @property
    def cutoff(self):
        return years_before(self.today, self.years)

    def compile(self):
        lookup = 'lte' if self.on_or_before else 'gt'
        return Q(**{f'{self.field}__{lookup}': self.cutoff})

    @property
    def params(self):
        return (self.cutoff,)


@dataclass(frozen=True)
class SubstringMatch(Predicate):
    """Substring containment; case rules follow the database collation."""
    field: str
    fragment: str

    def compile(self):
        return Q(**{f'{self.field}__contains': self.fragment})

    @property
    def params(self):
        return (self.fragment,)


@dataclass(frozen=True)
class Membership(Predicate):
    field: str
    values: Tuple[Any, ...]

    def compile(self):
        return Q(**{f'{self.field}__in': list(self.values)})

    @property
    def params(self):
        return self.values


@dataclass(frozen=True)
class Exists(Predicate):
    """
    At least one related row satisfies all inner conditions.

    patient_path is the lookup from the related model back to Patient.
    """
    model: Any
    patient_path: str
    conditions: Tuple[Predicate, ...] = ()

    def compile(self):
        queryset = self.model.objects.filter(**{self.patient_path: OuterRef('pk')})
        for condition in self.conditions:
            queryset = queryset.filter(condition.compile())
        return ExistsExpression(queryset)

    @property
    def params(self):
        return tuple(p for condition in self.conditions for p in condition.params)


@dataclass(frozen=True)
class CountAtLeast(Predicate):
    """At least `minimum` related rows satisfy all inner conditions."""
    model: Any
    patient_path: str
    minimum: int
    conditions: Tuple[Predicate, ...] = ()

    def count_expression(self):
        queryset = self.model.objects.filter(**{self.patient_path: OuterRef('pk')})
        for condition in self.conditions:
            queryset = queryset.filter(condition.compile())
        return related_count(queryset, self.patient_path)

    def compile(self):
        return GreaterThanOrEqual(self.count_expression(), self.minimum)

    @property
    def params(self):
        return tuple(p for condition in self.conditions for p in condition.params) + (self.minimum,)


def related_count(queryset, patient_path):
    """Correlated COUNT(*) subquery, 0 when no rows match."""
    counted = (
        queryset.order_by()
        .values(patient_path)
        .annotate(row_count=Count('pk'))
        .values('row_count')
    )
    return Coalesce(
        Subquery(counted, output_field=IntegerField()),
        Value(0),
        output_field=IntegerField(),
    )


# Visit-level and treatment-level existence conditions skip soft-deleted rows
# at every hop back to the patient.
LIVE_VISIT = (Equality('is_deleted', False),)
LIVE_TREATMENT = (
    Equality('is_deleted', False),
    Equality('visit__is_deleted', False),
)
LIVE_TREATMENT_AREA = (
    Equality('treatment__is_deleted', False),
    Equality('treatment__visit__is_deleted', False),
)

CONSENT_FLAGS = (
    ('has_botulinum_consent', ConsentTypeChoices.BOTULINUM),
    ('has_filler_consent', ConsentTypeChoices.FILLER),
    ('has_photo_consent', ConsentTypeChoices.PHOTO),
)


def build_predicates(search_filter, today=None):
    """
    Translate a SearchFilter into the ordered predicate list.

    The soft-delete predicate is always first. Every other predicate is
    emitted only when its field is present.
    """
    if today is None:
        today = timezone.now().date()

    f = search_filter
    predicates = [Equality('is_deleted', False)]

    # Patient demographics
    if f.is_present('ethnicity'):
        predicates.append(Equality('ethnicity', f.ethnicity))
    if f.is_present('sex'):
        predicates.append(Equality('sex', f.sex))
    if f.is_present('age_min'):
        predicates.append(TemporalRange('birth_date', f.age_min, today, on_or_before=True))
    if f.is_present('age_max'):
        # Still included on the day of the age_max birthday, excluded from
        # the (age_max + 1)th birthday on.
        predicates.append(TemporalRange('birth_date', f.age_max + 1, today, on_or_before=False))
    if f.is_present('min_visits'):
        predicates.append(CountAtLeast(Visit, 'patient', f.min_visits, LIVE_VISIT))

    # Consents are patient-level, regardless of visit
    for flag, consent_type in CONSENT_FLAGS:
        if f.is_present(flag):
            predicates.append(
                Exists(Consent, 'patient', (Equality('consent_type', consent_type.value),))
            )

    # Each visit-level bound matches its own visit
    if f.is_present('visit_date_from'):
        predicates.append(
            Exists(Visit, 'patient', LIVE_VISIT + (Range('date', lower=f.visit_date_from),))
        )
    if f.is_present('visit_date_to'):
        predicates.append(
            Exists(Visit, 'patient', LIVE_VISIT + (Range('date', upper=f.visit_date_to),))
        )
    if f.is_present('practitioner_id'):
        predicates.append(
            Exists(Visit, 'patient', LIVE_VISIT + (Equality('practitioner_id', f.practitioner_id),))
        )

    # Treatment filters
    if f.is_present('lot_number'):
        predicates.append(
            Exists(Treatment, 'visit__patient',
                   LIVE_TREATMENT + (SubstringMatch('lot_number', f.lot_number),))
        )
    if f.is_present('product_ids'):
        predicates.append(
            Exists(Treatment, 'visit__patient',
                   LIVE_TREATMENT + (Membership('product_id', tuple(f.product_ids)),))
        )
    if f.is_present('treatment_category_slugs'):
        predicates.append(
            Exists(Treatment, 'visit__patient',
                   LIVE_TREATMENT + (Membership('treatment_type', tuple(f.treatment_category_slugs)),))
        )
    if f.is_present('treated_area_ids'):
        predicates.append(
            Exists(TreatmentArea, 'treatment__visit__patient',
                   LIVE_TREATMENT_AREA + (Membership('treated_area_id', tuple(f.treated_area_ids)),))
        )

    return predicates
