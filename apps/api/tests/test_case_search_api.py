"""
API tests for case search, visit photo comparison and cost preview.
"""
import uuid
from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.clinical.models import Consent, Visit
from apps.core.models import AppSettings


@pytest.mark.django_db
class TestCaseSearchAPI:

    def test_requires_authentication(self, api_client):
        response = api_client.post(reverse('case-search'), {}, format='json')
        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_reception_forbidden(self, reception_client):
        response = reception_client.post(reverse('case-search'), {}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_empty_body_returns_all_active_patients(self, practitioner_client, patient_factory):
        patient_factory(first_name='Ann', last_name='Able')
        patient_factory(first_name='Ben', last_name='Baker')
        patient_factory(first_name='Old', last_name='Gone', is_deleted=True)

        response = practitioner_client.post(reverse('case-search'), {}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 2
        assert [r['last_name'] for r in response.data['results']] == ['Able', 'Baker']

    def test_result_payload(self, admin_client, patient_factory):
        patient = patient_factory(
            first_name='Ann',
            last_name='Able',
            ethnicity='Asian',
            birth_date=date(1990, 1, 2),
            city='Laval',
            province='QC',
        )
        Visit.objects.create(patient=patient, date=date(2024, 1, 1))

        response = admin_client.post(reverse('case-search'), {'ethnicity': 'Asian'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        [result] = response.data['results']
        assert result['patient_id'] == str(patient.id)
        assert result['birth_date'] == '1990-01-02'
        assert result['visit_count'] == 1
        assert result['treatment_count'] == 0

    def test_null_and_blank_fields_do_not_constrain(self, practitioner_client, patient_factory):
        patient_factory()

        response = practitioner_client.post(reverse('case-search'), {
            'ethnicity': '',
            'sex': None,
            'lot_number': '',
            'product_ids': [],
            'has_botulinum_consent': False,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

    def test_consent_flag(self, practitioner_client, patient_factory):
        consented = patient_factory(last_name='A')
        patient_factory(last_name='B')
        Consent.objects.create(patient=consented, consent_type='filler')

        response = practitioner_client.post(
            reverse('case-search'), {'has_filler_consent': True}, format='json'
        )

        assert response.data['count'] == 1
        assert response.data['results'][0]['patient_id'] == str(consented.id)

    def test_invalid_input_returns_400(self, practitioner_client):
        response = practitioner_client.post(reverse('case-search'), {
            'age_min': -1,
            'sex': 'unknown',
            'product_ids': ['not-a-uuid'],
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'age_min' in response.data
        assert 'sex' in response.data
        assert 'product_ids' in response.data

    def test_age_above_limit_returns_400(self, practitioner_client):
        response = practitioner_client.post(reverse('case-search'), {
            'age_min': 3000,
            'age_max': 5000,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'age_min' in response.data
        assert 'age_max' in response.data


@pytest.mark.django_db
class TestVisitPhotoComparisonAPI:

    def test_pairs_photos(self, practitioner_client, visit_factory, photo_factory):
        before = visit_factory(date=date(2024, 1, 1))
        after = visit_factory(date=date(2024, 4, 1))
        before_front = photo_factory(before, 'front', 'relaxed')
        after_front = photo_factory(after, 'front', 'relaxed')
        photo_factory(after, 'left', None)

        response = practitioner_client.get(
            reverse('visit-photo-compare'), {'before': before.id, 'after': after.id}
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 2
        front, left = response.data
        assert front['position'] == 'front'
        assert front['state'] == 'relaxed'
        assert front['before_photo']['id'] == str(before_front.id)
        assert front['after_photo']['id'] == str(after_front.id)
        assert left['position'] == 'left'
        assert left['state'] is None
        assert left['before_photo'] is None

    def test_missing_parameter(self, practitioner_client, visit):
        response = practitioner_client.get(reverse('visit-photo-compare'), {'before': visit.id})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_uuid(self, practitioner_client, visit):
        response = practitioner_client.get(
            reverse('visit-photo-compare'), {'before': visit.id, 'after': 'abc'}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_visit_returns_404(self, practitioner_client, visit):
        response = practitioner_client.get(
            reverse('visit-photo-compare'), {'before': visit.id, 'after': uuid.uuid4()}
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_deleted_visit_returns_404(self, practitioner_client, visit_factory):
        before = visit_factory()
        after = visit_factory(is_deleted=True)

        response = practitioner_client.get(
            reverse('visit-photo-compare'), {'before': before.id, 'after': after.id}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_reception_forbidden(self, reception_client, visit):
        response = reception_client.get(
            reverse('visit-photo-compare'), {'before': visit.id, 'after': visit.id}
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestCostPreviewAPI:

    def test_default_rates(self, practitioner_client):
        response = practitioner_client.post(reverse('cost-preview'), {'subtotal': '100.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['provincial_tax']) == Decimal('9.975')
        assert Decimal(response.data['federal_tax']) == Decimal('5')
        assert Decimal(response.data['total']) == Decimal('114.975')
        assert response.data['lines'] == [
            'Subtotal: $100.00',
            'QST (9.975%): $9.98',
            'GST (5%): $5.00',
            'Total: $114.98',
        ]

    def test_zero_rate_line_omitted(self, practitioner_client):
        app_settings = AppSettings.load()
        app_settings.provincial_tax_rate = Decimal('0')
        app_settings.save()

        response = practitioner_client.post(reverse('cost-preview'), {'subtotal': '200'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['lines'] == [
            'Subtotal: $200.00',
            'GST (5%): $10.00',
            'Total: $210.00',
        ]

    def test_negative_subtotal_rejected(self, practitioner_client):
        response = practitioner_client.post(reverse('cost-preview'), {'subtotal': '-1'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
