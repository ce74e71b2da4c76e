"""
Clinical models: patient, visit, treatment, annotation, consent, clinical_photo, portfolio.
"""
import uuid
from django.db import models
from django.conf import settings


# ============================================================================
# Enums
# ============================================================================

class SexChoices(models.TextChoices):
    """Patient sex/gender"""
    FEMALE = 'female', 'Female'
    MALE = 'male', 'Male'
    OTHER = 'other', 'Other'


class ConsentTypeChoices(models.TextChoices):
    """Consent types signed at the clinic"""
    BOTULINUM = 'botulinum', 'Botulinum Toxin'
    FILLER = 'filler', 'Dermal Filler'
    PHOTO = 'photo', 'Photography'


class ProductCategoryChoices(models.TextChoices):
    """Injectable catalog categories"""
    NEUROTOXIN = 'neurotoxin', 'Neurotoxin'
    FILLER = 'filler', 'Filler'
    MICRONEEDLING = 'microneedling', 'Microneedling'


class TreatmentCategoryTypeChoices(models.TextChoices):
    """Treatment category families"""
    FACIAL = 'facial', 'Facial'
    DENTAL = 'dental', 'Dental'


class PhotoStateChoices(models.TextChoices):
    """Muscle state a clinical photo was taken in"""
    RELAXED = 'relaxed', 'Relaxed'
    ACTIVE = 'active', 'Active'


class DiagramViewChoices(models.TextChoices):
    """Face diagram views used by injection site maps"""
    FRONT = 'front', 'Front'
    LEFT = 'left', 'Left'
    RIGHT = 'right', 'Right'
    THREE_QUARTER = 'three_quarter', 'Three Quarter'


# ============================================================================
# Models
# ============================================================================

class Patient(models.Model):
    """
    Patient records with demographics and contact info.

    Fields:
    - id: UUID PK
    - first_name, last_name
    - birth_date, sex, ethnicity nullable
    - email, phone nullable
    - city, province nullable
    - Soft delete fields
    - created_at, updated_at

    Indices: (last_name, first_name), is_deleted
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Name fields
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)

    # Demographics
    birth_date = models.DateField(blank=True, null=True)
    sex = models.CharField(
        max_length=20,
        choices=SexChoices.choices,
        blank=True,
        null=True
    )
    ethnicity = models.CharField(max_length=100, blank=True, null=True)

    # Contact
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=50, blank=True, null=True)

    # Address
    city = models.CharField(max_length=100, blank=True, null=True)
    province = models.CharField(max_length=100, blank=True, null=True)

    # Soft delete
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'patient'
        verbose_name = 'Patient'
        verbose_name_plural = 'Patients'
        indexes = [
            models.Index(fields=['last_name', 'first_name'], name='idx_patient_name'),
            models.Index(fields=['is_deleted'], name='idx_patient_deleted'),
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class Visit(models.Model):
    """
    A dated clinic visit for one patient.

    clinical_notes holds rich-text HTML from the notes editor.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(
        'Patient',
        on_delete=models.CASCADE,
        related_name='visits'
    )
    practitioner = models.ForeignKey(
        'authz.Practitioner',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='visits'
    )
    date = models.DateField()
    time = models.TimeField(blank=True, null=True)
    clinical_notes = models.TextField(blank=True, null=True)

    # Soft delete
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'visit'
        verbose_name = 'Visit'
        verbose_name_plural = 'Visits'
        indexes = [
            models.Index(fields=['patient'], name='idx_visit_patient'),
            models.Index(fields=['practitioner'], name='idx_visit_practitioner'),
            models.Index(fields=['date'], name='idx_visit_date'),
            models.Index(fields=['is_deleted'], name='idx_visit_deleted'),
        ]

    def __str__(self):
        return f"Visit {self.patient} ({self.date})"


class Product(models.Model):
    """Injectable catalog entry (neurotoxins, fillers, microneedling)."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    brand = models.CharField(max_length=255, blank=True, null=True)
    category = models.CharField(
        max_length=30,
        choices=ProductCategoryChoices.choices
    )
    unit_type = models.CharField(max_length=30, default='units')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'product'
        verbose_name = 'Product'
        verbose_name_plural = 'Products'

    def __str__(self):
        return f"{self.name} ({self.brand})" if self.brand else self.name


class TreatedArea(models.Model):
    """Anatomical area catalog (glabella, forehead, crow's feet...)."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'treated_area'
        verbose_name = 'Treated Area'
        verbose_name_plural = 'Treated Areas'

    def __str__(self):
        return self.name


class TreatmentCategory(models.Model):
    """
    Treatment categories.

    Treatments reference a category by its slug (Treatment.treatment_type),
    not by foreign key.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    type = models.CharField(
        max_length=20,
        choices=TreatmentCategoryTypeChoices.choices,
        default=TreatmentCategoryTypeChoices.FACIAL
    )
    sort_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'treatment_category'
        verbose_name = 'Treatment Category'
        verbose_name_plural = 'Treatment Categories'
        ordering = ['sort_order', 'name']

    def __str__(self):
        return self.name


class Treatment(models.Model):
    """
    A product administered during a visit.

    Fields:
    - visit_id: FK -> visit
    - treatment_type: category slug tag, nullable
    - product_id: FK -> product nullable
    - lot_number, expiry_date nullable
    - total_units, total_cost nullable
    - Soft delete fields
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    visit = models.ForeignKey(
        'Visit',
        on_delete=models.CASCADE,
        related_name='treatments'
    )
    treatment_type = models.CharField(max_length=100, blank=True, null=True)
    product = models.ForeignKey(
        'Product',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='treatments'
    )
    lot_number = models.CharField(max_length=100, blank=True, null=True)
    expiry_date = models.DateField(blank=True, null=True)
    total_units = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    total_cost = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)

    # Soft delete
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'treatment'
        verbose_name = 'Treatment'
        verbose_name_plural = 'Treatments'
        indexes = [
            models.Index(fields=['visit'], name='idx_treatment_visit'),
            models.Index(fields=['treatment_type'], name='idx_treatment_type'),
            models.Index(fields=['is_deleted'], name='idx_treatment_deleted'),
        ]

    def __str__(self):
        return f"{self.label} - {self.visit}"

    @property
    def label(self):
        """Heading used in reports: product name and brand, else the category tag."""
        if self.product_id:
            if self.product.brand:
                return f"{self.product.name} — {self.product.brand}"
            return self.product.name
        return self.treatment_type or 'Treatment'


class TreatmentArea(models.Model):
    """Units and cost of one treatment in one treated area."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    treatment = models.ForeignKey(
        'Treatment',
        on_delete=models.CASCADE,
        related_name='areas'
    )
    treated_area = models.ForeignKey(
        'TreatedArea',
        on_delete=models.PROTECT,
        related_name='treatment_areas'
    )
    units = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    cost = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'treatment_area'
        verbose_name = 'Treatment Area'
        verbose_name_plural = 'Treatment Areas'
        indexes = [
            models.Index(fields=['treatment'], name='idx_treatment_area_tx'),
            models.Index(fields=['treated_area'], name='idx_treatment_area_area'),
        ]

    def __str__(self):
        return f"{self.treated_area}: {self.units}"


class Annotation(models.Model):
    """
    Injection site map for a treatment.

    points_json is stored as raw text and is not validated on write;
    readers must tolerate corrupt payloads.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    treatment = models.ForeignKey(
        'Treatment',
        on_delete=models.CASCADE,
        related_name='annotations'
    )
    diagram_view = models.CharField(
        max_length=20,
        choices=DiagramViewChoices.choices,
        blank=True,
        null=True
    )
    points_json = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'annotation'
        verbose_name = 'Annotation'
        verbose_name_plural = 'Annotations'
        indexes = [
            models.Index(fields=['treatment'], name='idx_annotation_treatment'),
        ]

    def __str__(self):
        return f"Annotation {self.diagram_view} - {self.treatment_id}"


class Consent(models.Model):
    """
    Signed patient consents.

    Fields:
    - patient_id: FK -> patient
    - visit_id: FK -> visit nullable
    - consent_type: botulinum|filler|photo
    - consent_text, signature_data (PNG data URL) nullable
    - signed_at nullable
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    patient = models.ForeignKey(
        'Patient',
        on_delete=models.CASCADE,
        related_name='consents'
    )
    visit = models.ForeignKey(
        'Visit',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='consents'
    )
    consent_type = models.CharField(
        max_length=30,
        choices=ConsentTypeChoices.choices
    )
    consent_text = models.TextField(blank=True, null=True)
    signature_data = models.TextField(blank=True, null=True)
    signed_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'consent'
        verbose_name = 'Consent'
        verbose_name_plural = 'Consents'
        indexes = [
            models.Index(fields=['patient'], name='idx_consent_patient'),
            models.Index(fields=['visit'], name='idx_consent_visit'),
            models.Index(fields=['consent_type'], name='idx_consent_type'),
        ]

    def __str__(self):
        return f"{self.patient} - {self.consent_type}"


class ClinicalPhoto(models.Model):
    """
    Clinical photos taken during a visit.

    Fields:
    - visit_id, patient_id
    - original_path: relative to PHOTO_STORAGE_ROOT
    - thumbnail_path nullable
    - photo_position nullable (e.g. "front", "left-45")
    - photo_state nullable (relaxed|active)
    - width, height nullable
    - sort_order
    - Soft delete fields
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    visit = models.ForeignKey(
        'Visit',
        on_delete=models.CASCADE,
        related_name='photos'
    )
    patient = models.ForeignKey(
        'Patient',
        on_delete=models.CASCADE,
        related_name='clinical_photos'
    )
    original_path = models.CharField(max_length=512)
    thumbnail_path = models.CharField(max_length=512, blank=True, null=True)
    photo_position = models.CharField(max_length=50, blank=True, null=True)
    photo_state = models.CharField(
        max_length=20,
        choices=PhotoStateChoices.choices,
        blank=True,
        null=True
    )
    width = models.IntegerField(blank=True, null=True)
    height = models.IntegerField(blank=True, null=True)
    sort_order = models.IntegerField(default=0)

    # Soft delete
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clinical_photo'
        verbose_name = 'Clinical Photo'
        verbose_name_plural = 'Clinical Photos'
        indexes = [
            models.Index(fields=['visit'], name='idx_clinical_photo_visit'),
            models.Index(fields=['patient'], name='idx_clinical_photo_patient'),
            models.Index(fields=['is_deleted'], name='idx_clinical_photo_deleted'),
        ]

    def __str__(self):
        return f"Clinical Photo {self.patient} - {self.photo_position}"

    @property
    def caption(self):
        """'position - state', state omitted when blank."""
        if self.photo_state:
            return f"{self.photo_position} - {self.photo_state}"
        return self.photo_position or ''


class Portfolio(models.Model):
    """Curated set of before/after cases presented as a landscape PDF."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    category = models.CharField(max_length=100, blank=True, null=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='portfolios'
    )

    # Soft delete
    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'portfolio'
        verbose_name = 'Portfolio'
        verbose_name_plural = 'Portfolios'

    def __str__(self):
        return self.title


class PortfolioItem(models.Model):
    """
    One before/after comparison in a portfolio.

    The shown photos are looked up by (photo_position, photo_state) in the
    before and after visits; photo_state may be blank to match any state.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    portfolio = models.ForeignKey(
        'Portfolio',
        on_delete=models.CASCADE,
        related_name='items'
    )
    patient = models.ForeignKey(
        'Patient',
        on_delete=models.CASCADE,
        related_name='portfolio_items'
    )
    before_visit = models.ForeignKey(
        'Visit',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='portfolio_items_before'
    )
    after_visit = models.ForeignKey(
        'Visit',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='portfolio_items_after'
    )
    photo_position = models.CharField(max_length=50, blank=True, null=True)
    photo_state = models.CharField(max_length=20, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'portfolio_item'
        verbose_name = 'Portfolio Item'
        verbose_name_plural = 'Portfolio Items'
        indexes = [
            models.Index(fields=['portfolio'], name='idx_portfolio_item_portfolio'),
        ]

    def __str__(self):
        return f"{self.portfolio} - {self.patient}"
