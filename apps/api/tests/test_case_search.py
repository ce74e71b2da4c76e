"""
Tests for case search: predicate building and query compilation.
"""
from datetime import date
from decimal import Decimal

import pytest

from apps.clinical.case_search import SearchFilter, build_predicates, search_cases
from apps.clinical.case_search.predicates import (
    CountAtLeast, Equality, Exists, Membership, Range, SubstringMatch, TemporalRange, years_before,
)
from apps.clinical.models import Consent, Treatment, TreatmentArea, TreatedArea, Visit

TODAY = date(2024, 6, 15)


def result_ids(results):
    return [r.patient_id for r in results]


class TestSearchFilter:
    """Absent vs present field semantics."""

    def test_empty_filter_has_no_present_fields(self):
        assert SearchFilter().present_fields() == []

    def test_blank_values_are_absent(self):
        search_filter = SearchFilter(ethnicity='', lot_number='', product_ids=[], sex=None)
        assert search_filter.present_fields() == []

    def test_zero_is_present(self):
        search_filter = SearchFilter(age_min=0, min_visits=0)
        assert search_filter.present_fields() == ['age_min', 'min_visits']

    def test_consent_flag_false_is_absent(self):
        search_filter = SearchFilter(has_botulinum_consent=False, has_filler_consent=True)
        assert search_filter.present_fields() == ['has_filler_consent']

    def test_from_dict_ignores_unknown_keys(self):
        search_filter = SearchFilter.from_dict({'sex': 'male', 'unknown': 'x'})
        assert search_filter.sex == 'male'


class TestBuildPredicates:

    def test_soft_delete_predicate_always_first(self):
        predicates = build_predicates(SearchFilter(), today=TODAY)
        assert predicates == [Equality('is_deleted', False)]

    def test_one_predicate_per_present_field(self):
        search_filter = SearchFilter(
            ethnicity='Asian',
            age_min=30,
            has_photo_consent=True,
            lot_number='AB12',
            product_ids=['p1', 'p2'],
        )
        predicates = build_predicates(search_filter, today=TODAY)

        assert predicates[0] == Equality('is_deleted', False)
        assert predicates[1] == Equality('ethnicity', 'Asian')
        assert predicates[2] == TemporalRange('birth_date', 30, TODAY, on_or_before=True)
        assert isinstance(predicates[3], Exists)
        assert predicates[3].model is Consent
        assert predicates[3].params == ('photo',)
        assert isinstance(predicates[4], Exists)
        assert SubstringMatch('lot_number', 'AB12') in predicates[4].conditions
        assert Membership('product_id', ('p1', 'p2')) in predicates[5].conditions
        assert len(predicates) == 6

    def test_unchecked_consent_adds_nothing(self):
        predicates = build_predicates(SearchFilter(has_botulinum_consent=False), today=TODAY)
        assert len(predicates) == 1

    def test_age_max_uses_next_birthday_cutoff(self):
        predicates = build_predicates(SearchFilter(age_max=40), today=TODAY)
        assert predicates[1] == TemporalRange('birth_date', 41, TODAY, on_or_before=False)
        assert predicates[1].params == (date(1983, 6, 15),)

    def test_min_visits_builds_count_predicate(self):
        predicates = build_predicates(SearchFilter(min_visits=3), today=TODAY)
        assert isinstance(predicates[1], CountAtLeast)
        assert predicates[1].model is Visit
        assert predicates[1].minimum == 3

    def test_visit_date_bounds_are_independent_predicates(self):
        predicates = build_predicates(
            SearchFilter(visit_date_from=date(2024, 1, 1), visit_date_to=date(2024, 2, 1)),
            today=TODAY,
        )
        assert len(predicates) == 3
        assert Range('date', lower=date(2024, 1, 1)) in predicates[1].conditions
        assert Range('date', upper=date(2024, 2, 1)) in predicates[2].conditions

    def test_treated_areas_query_treatment_area_rows(self):
        predicates = build_predicates(SearchFilter(treated_area_ids=['a1']), today=TODAY)
        assert predicates[1].model is TreatmentArea
        assert predicates[1].patient_path == 'treatment__visit__patient'


class TestYearsBefore:

    def test_plain_date(self):
        assert years_before(date(2024, 6, 15), 30) == date(1994, 6, 15)

    def test_leap_day_rolls_to_march_first(self):
        assert years_before(date(2024, 2, 29), 1) == date(2023, 3, 1)

    def test_leap_day_to_leap_year(self):
        assert years_before(date(2024, 2, 29), 4) == date(2020, 2, 29)

    def test_span_past_first_year_clamps(self):
        assert years_before(date(2024, 6, 15), 5000) == date.min


@pytest.mark.django_db
class TestSearchCases:
    """End-to-end search against the database."""

    def test_empty_filter_returns_all_active_patients_ordered(self, patient_factory):
        zed = patient_factory(first_name='Ann', last_name='Zed')
        abe_b = patient_factory(first_name='Bob', last_name='Abe')
        abe_a = patient_factory(first_name='Amy', last_name='Abe')
        patient_factory(first_name='Gone', last_name='Deleted', is_deleted=True)

        results = search_cases(SearchFilter(), today=TODAY)

        assert result_ids(results) == [str(abe_a.id), str(abe_b.id), str(zed.id)]

    def test_result_limit(self, settings, patient_factory):
        settings.CASE_SEARCH_RESULT_LIMIT = 2
        for index in range(4):
            patient_factory(last_name=f'Patient{index}')

        results = search_cases(SearchFilter(), today=TODAY)

        assert [r.last_name for r in results] == ['Patient0', 'Patient1']

    def test_ethnicity_and_sex(self, patient_factory):
        match = patient_factory(ethnicity='Asian', sex='female')
        patient_factory(ethnicity='Asian', sex='male')
        patient_factory(ethnicity='Caucasian', sex='female')

        results = search_cases(SearchFilter(ethnicity='Asian', sex='female'), today=TODAY)

        assert result_ids(results) == [str(match.id)]

    def test_age_min_includes_birthday_today(self, patient_factory):
        turns_30_today = patient_factory(last_name='A', birth_date=date(1994, 6, 15))
        turns_30_tomorrow = patient_factory(last_name='B', birth_date=date(1994, 6, 16))
        patient_factory(last_name='C', birth_date=None)

        results = search_cases(SearchFilter(age_min=30), today=TODAY)

        assert result_ids(results) == [str(turns_30_today.id)]
        assert str(turns_30_tomorrow.id) not in result_ids(results)

    def test_age_max_keeps_patient_until_next_birthday(self, patient_factory):
        still_30 = patient_factory(last_name='A', birth_date=date(1993, 6, 16))
        turns_31_today = patient_factory(last_name='B', birth_date=date(1993, 6, 15))
        young = patient_factory(last_name='C', birth_date=date(2000, 1, 1))

        results = search_cases(SearchFilter(age_max=30), today=TODAY)

        assert result_ids(results) == [str(still_30.id), str(young.id)]
        assert str(turns_31_today.id) not in result_ids(results)

    def test_age_max_includes_birthday_today(self, patient_factory):
        turns_30_today = patient_factory(last_name='A', birth_date=date(1994, 6, 15))

        results = search_cases(SearchFilter(age_max=30), today=TODAY)

        assert result_ids(results) == [str(turns_30_today.id)]

    def test_huge_ages_do_not_fail(self, patient_factory):
        patient = patient_factory(birth_date=date(1950, 1, 1))

        assert search_cases(SearchFilter(age_min=3000), today=TODAY) == []
        assert result_ids(search_cases(SearchFilter(age_max=5000), today=TODAY)) == [str(patient.id)]

    def test_min_visits_ignores_deleted_visits(self, patient_factory):
        regular = patient_factory(last_name='A')
        sparse = patient_factory(last_name='B')
        for _ in range(2):
            Visit.objects.create(patient=regular, date=date(2024, 1, 1))
        Visit.objects.create(patient=sparse, date=date(2024, 1, 1))
        Visit.objects.create(patient=sparse, date=date(2024, 2, 1), is_deleted=True)

        results = search_cases(SearchFilter(min_visits=2), today=TODAY)

        assert result_ids(results) == [str(regular.id)]

    def test_min_visits_zero_matches_patients_without_visits(self, patient_factory):
        patient = patient_factory()

        results = search_cases(SearchFilter(min_visits=0), today=TODAY)

        assert result_ids(results) == [str(patient.id)]

    def test_consent_filter(self, patient_factory):
        consented = patient_factory(last_name='A')
        other = patient_factory(last_name='B')
        Consent.objects.create(patient=consented, consent_type='botulinum')
        Consent.objects.create(patient=other, consent_type='filler')

        results = search_cases(SearchFilter(has_botulinum_consent=True), today=TODAY)
        assert result_ids(results) == [str(consented.id)]

        results = search_cases(SearchFilter(has_botulinum_consent=False), today=TODAY)
        assert len(results) == 2

    def test_visit_date_bounds_may_match_different_visits(self, patient_factory):
        patient = patient_factory()
        Visit.objects.create(patient=patient, date=date(2023, 1, 10))
        Visit.objects.create(patient=patient, date=date(2024, 12, 10))

        results = search_cases(
            SearchFilter(visit_date_from=date(2024, 1, 1), visit_date_to=date(2023, 12, 31)),
            today=TODAY,
        )

        assert result_ids(results) == [str(patient.id)]

    def test_visit_date_from_ignores_deleted_visits(self, patient_factory):
        patient = patient_factory()
        Visit.objects.create(patient=patient, date=date(2024, 5, 1), is_deleted=True)

        results = search_cases(SearchFilter(visit_date_from=date(2024, 1, 1)), today=TODAY)

        assert results == []

    def test_practitioner_filter(self, patient_factory, practitioner):
        seen = patient_factory(last_name='A')
        patient_factory(last_name='B')
        Visit.objects.create(patient=seen, practitioner=practitioner, date=date(2024, 1, 1))

        results = search_cases(SearchFilter(practitioner_id=practitioner.id), today=TODAY)

        assert result_ids(results) == [str(seen.id)]

    def test_lot_number_substring(self, patient_factory):
        match = patient_factory(last_name='A')
        other = patient_factory(last_name='B')
        Treatment.objects.create(
            visit=Visit.objects.create(patient=match, date=date(2024, 1, 1)),
            lot_number='C1234X',
        )
        Treatment.objects.create(
            visit=Visit.objects.create(patient=other, date=date(2024, 1, 1)),
            lot_number='Z999',
        )

        results = search_cases(SearchFilter(lot_number='234'), today=TODAY)

        assert result_ids(results) == [str(match.id)]

    def test_product_filter_skips_deleted_treatments(self, patient_factory, product):
        live = patient_factory(last_name='A')
        deleted = patient_factory(last_name='B')
        Treatment.objects.create(
            visit=Visit.objects.create(patient=live, date=date(2024, 1, 1)),
            product=product,
        )
        Treatment.objects.create(
            visit=Visit.objects.create(patient=deleted, date=date(2024, 1, 1)),
            product=product,
            is_deleted=True,
        )

        results = search_cases(SearchFilter(product_ids=[product.id]), today=TODAY)

        assert result_ids(results) == [str(live.id)]

    def test_treatment_category_filter(self, patient_factory):
        match = patient_factory(last_name='A')
        patient_factory(last_name='B')
        Treatment.objects.create(
            visit=Visit.objects.create(patient=match, date=date(2024, 1, 1)),
            treatment_type='filler',
        )

        results = search_cases(
            SearchFilter(treatment_category_slugs=['filler', 'skin-booster']),
            today=TODAY,
        )

        assert result_ids(results) == [str(match.id)]

    def test_treated_area_filter_skips_deleted_visits(self, patient_factory, treated_area):
        live = patient_factory(last_name='A')
        hidden = patient_factory(last_name='B')
        for patient, visit_deleted in ((live, False), (hidden, True)):
            treatment = Treatment.objects.create(
                visit=Visit.objects.create(patient=patient, date=date(2024, 1, 1), is_deleted=visit_deleted),
            )
            TreatmentArea.objects.create(treatment=treatment, treated_area=treated_area, units=Decimal('4'))
        unused_area = TreatedArea.objects.create(name='Chin')

        results = search_cases(SearchFilter(treated_area_ids=[treated_area.id]), today=TODAY)
        assert result_ids(results) == [str(live.id)]

        results = search_cases(SearchFilter(treated_area_ids=[unused_area.id]), today=TODAY)
        assert results == []

    def test_counts_exclude_deleted_rows(self, patient_factory):
        patient = patient_factory()
        live_visit = Visit.objects.create(patient=patient, date=date(2024, 1, 1))
        deleted_visit = Visit.objects.create(patient=patient, date=date(2024, 2, 1), is_deleted=True)
        Visit.objects.create(patient=patient, date=date(2024, 3, 1))
        Treatment.objects.create(visit=live_visit)
        Treatment.objects.create(visit=live_visit, is_deleted=True)
        Treatment.objects.create(visit=deleted_visit)

        [result] = search_cases(SearchFilter(), today=TODAY)

        assert result.visit_count == 2
        assert result.treatment_count == 1

    def test_patient_without_visits_has_zero_counts(self, patient_factory):
        patient_factory()

        [result] = search_cases(SearchFilter(), today=TODAY)

        assert result.visit_count == 0
        assert result.treatment_count == 0

    def test_filters_combine_with_and(self, patient_factory):
        both = patient_factory(last_name='A', ethnicity='Asian')
        only_ethnicity = patient_factory(last_name='B', ethnicity='Asian')
        Consent.objects.create(patient=both, consent_type='photo')
        only_consent = patient_factory(last_name='C', ethnicity='Other')
        Consent.objects.create(patient=only_consent, consent_type='photo')

        results = search_cases(SearchFilter(ethnicity='Asian', has_photo_consent=True), today=TODAY)

        assert result_ids(results) == [str(both.id)]
        assert str(only_ethnicity.id) not in result_ids(results)

    def test_repeated_search_is_identical(self, patient_factory):
        for first_name in ('Cy', 'Al', 'Bo'):
            patient_factory(first_name=first_name, last_name='Same')
        search_filter = SearchFilter(sex='female')

        first = search_cases(search_filter, today=TODAY)
        second = search_cases(search_filter, today=TODAY)

        assert first == second
        assert [r.first_name for r in first] == ['Al', 'Bo', 'Cy']
