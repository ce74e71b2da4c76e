"""
Global test fixtures for pytest.

Provides reusable fixtures for API testing:
- Authenticated API clients by role
- Model factories (Patient, Visit, Treatment, ClinicalPhoto, Portfolio, ...)
- Temporary photo storage and report export directories
"""
import base64
import io
from datetime import date
from decimal import Decimal

import pytest
from PIL import Image
from rest_framework.test import APIClient

from apps.authz.models import Practitioner, Role, RoleChoices, User, UserRole
from apps.clinical.models import (
    Annotation, ClinicalPhoto, Consent, Patient, Portfolio, PortfolioItem,
    Product, TreatedArea, Treatment, TreatmentArea, Visit,
)


# ============================================================================
# API Clients
# ============================================================================

def _user_with_role(email, role_name, **extra):
    user = User.objects.create_user(
        email=email,
        password='testpass123',
        is_active=True,
        **extra
    )
    role, _ = Role.objects.get_or_create(name=role_name)
    UserRole.objects.create(user=user, role=role)
    return user


@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    return _user_with_role('admin@test.com', RoleChoices.ADMIN, is_staff=True, is_superuser=True)


@pytest.fixture
def admin_client(admin_user):
    """Authenticated API client with Admin role."""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def practitioner_user(db):
    return _user_with_role('practitioner@test.com', RoleChoices.PRACTITIONER)


@pytest.fixture
def practitioner(practitioner_user):
    return Practitioner.objects.create(
        user=practitioner_user,
        display_name='Dr. Test Practitioner',
        is_active=True
    )


@pytest.fixture
def practitioner_client(practitioner_user, practitioner):
    """
    Authenticated API client with Practitioner role.
    Practitioner has clinical access (case search, photos, reports).
    """
    client = APIClient()
    client.force_authenticate(user=practitioner_user)
    return client


@pytest.fixture
def reception_client(db):
    """
    Authenticated API client with Reception role.
    Reception has no access to clinical records.
    """
    user = _user_with_role('reception@test.com', RoleChoices.RECEPTION)
    client = APIClient()
    client.force_authenticate(user=user)
    return client


# ============================================================================
# Storage
# ============================================================================

@pytest.fixture
def photo_root(settings, tmp_path):
    root = tmp_path / 'photos'
    root.mkdir()
    settings.PHOTO_STORAGE_ROOT = root
    return root


@pytest.fixture
def export_root(settings, tmp_path):
    root = tmp_path / 'exports'
    settings.REPORT_EXPORT_ROOT = root
    return root


@pytest.fixture
def write_image(photo_root):
    """
    Write a small JPEG under the photo root and return its stored path.

    Usage:
        path = write_image('visit1/front.jpg')
    """
    def _write(relative_path, size=(64, 48), color=(200, 120, 90)):
        target = photo_root / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        Image.new('RGB', size, color).save(target, format='JPEG')
        return relative_path
    return _write


@pytest.fixture
def signature_data_url():
    buffer = io.BytesIO()
    Image.new('RGBA', (120, 40), (0, 0, 0, 255)).save(buffer, format='PNG')
    return 'data:image/png;base64,' + base64.b64encode(buffer.getvalue()).decode('ascii')


# ============================================================================
# Model factories
# ============================================================================

@pytest.fixture
def patient_factory(db):
    """
    Factory fixture for creating patients.

    Usage:
        patient1 = patient_factory(first_name='Jane', last_name='Smith')
        patient2 = patient_factory(ethnicity='Asian', birth_date=date(1990, 1, 1))
    """
    def _create_patient(**kwargs):
        defaults = {
            'first_name': 'Test',
            'last_name': 'Patient',
            'sex': 'female',
        }
        defaults.update(kwargs)
        return Patient.objects.create(**defaults)

    return _create_patient


@pytest.fixture
def patient(patient_factory):
    return patient_factory(
        first_name='Jane',
        last_name='Doe',
        birth_date=date(1985, 6, 15),
        email='jane@example.com',
        city='Montreal',
        province='QC',
    )


@pytest.fixture
def visit_factory(db, patient):
    def _create_visit(**kwargs):
        defaults = {
            'patient': patient,
            'date': date(2024, 3, 1),
        }
        defaults.update(kwargs)
        return Visit.objects.create(**defaults)

    return _create_visit


@pytest.fixture
def visit(visit_factory, practitioner):
    return visit_factory(practitioner=practitioner)


@pytest.fixture
def product(db):
    return Product.objects.create(name='Botox', brand='Allergan', category='neurotoxin')


@pytest.fixture
def treated_area(db):
    return TreatedArea.objects.create(name='Forehead')


@pytest.fixture
def treatment_factory(db, visit):
    def _create_treatment(**kwargs):
        defaults = {
            'visit': visit,
            'treatment_type': 'botox',
        }
        defaults.update(kwargs)
        return Treatment.objects.create(**defaults)

    return _create_treatment


@pytest.fixture
def treatment_area_factory(db, treated_area):
    def _create_area(treatment, **kwargs):
        defaults = {
            'treated_area': treated_area,
            'units': Decimal('20'),
            'cost': Decimal('100.00'),
        }
        defaults.update(kwargs)
        return TreatmentArea.objects.create(treatment=treatment, **defaults)

    return _create_area


@pytest.fixture
def annotation_factory(db):
    def _create_annotation(treatment, points_json, diagram_view='front'):
        return Annotation.objects.create(
            treatment=treatment,
            diagram_view=diagram_view,
            points_json=points_json,
        )

    return _create_annotation


@pytest.fixture
def consent_factory(db, patient):
    def _create_consent(**kwargs):
        defaults = {
            'patient': patient,
            'consent_type': 'botulinum',
        }
        defaults.update(kwargs)
        return Consent.objects.create(**defaults)

    return _create_consent


@pytest.fixture
def photo_factory(db):
    """
    Usage:
        photo_factory(visit, 'front', 'relaxed', original_path='a.jpg')
    """
    def _create_photo(visit, position=None, state=None, **kwargs):
        defaults = {
            'original_path': f'{visit.id}/{position or "photo"}-{state or "none"}.jpg',
            'sort_order': 0,
        }
        defaults.update(kwargs)
        return ClinicalPhoto.objects.create(
            visit=visit,
            patient=visit.patient,
            photo_position=position,
            photo_state=state,
            **defaults
        )

    return _create_photo


@pytest.fixture
def portfolio(db, admin_user):
    return Portfolio.objects.create(title='Forehead Lines', category='botulinum', owner=admin_user)


@pytest.fixture
def portfolio_item_factory(db, portfolio, patient):
    def _create_item(**kwargs):
        defaults = {
            'portfolio': portfolio,
            'patient': patient,
        }
        defaults.update(kwargs)
        return PortfolioItem.objects.create(**defaults)

    return _create_item
