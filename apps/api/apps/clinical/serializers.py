"""
Clinical serializers for case search, photo comparison and cost preview.
"""
from rest_framework import serializers

from apps.clinical.case_search import SearchFilter
from apps.clinical.models import SexChoices

MAX_AGE = 150


class CaseSearchFilterSerializer(serializers.Serializer):
    """
    Request body for case search.

    Every field is optional; omitted, null, blank and empty-list values do
    not constrain the search.
    """
    # Patient demographics
    ethnicity = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    sex = serializers.ChoiceField(
        choices=SexChoices.choices,
        required=False,
        allow_blank=True,
        allow_null=True
    )
    age_min = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=MAX_AGE)
    age_max = serializers.IntegerField(required=False, allow_null=True, min_value=0, max_value=MAX_AGE)
    min_visits = serializers.IntegerField(required=False, allow_null=True, min_value=0)

    # Consent status
    has_botulinum_consent = serializers.BooleanField(required=False, allow_null=True)
    has_filler_consent = serializers.BooleanField(required=False, allow_null=True)
    has_photo_consent = serializers.BooleanField(required=False, allow_null=True)

    # Visit filters
    visit_date_from = serializers.DateField(required=False, allow_null=True)
    visit_date_to = serializers.DateField(required=False, allow_null=True)
    lot_number = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=True)
    practitioner_id = serializers.UUIDField(required=False, allow_null=True)

    # Treatment filters
    product_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        allow_empty=True,
        allow_null=True
    )
    treatment_category_slugs = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        allow_empty=True,
        allow_null=True
    )
    treated_area_ids = serializers.ListField(
        child=serializers.UUIDField(),
        required=False,
        allow_empty=True,
        allow_null=True
    )

    def to_search_filter(self):
        return SearchFilter.from_dict(self.validated_data)


class CaseResultSerializer(serializers.Serializer):
    """One matching patient with visit and treatment counts."""
    patient_id = serializers.CharField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    sex = serializers.CharField(allow_null=True)
    birth_date = serializers.DateField(allow_null=True)
    ethnicity = serializers.CharField(allow_null=True)
    city = serializers.CharField(allow_null=True)
    province = serializers.CharField(allow_null=True)
    visit_count = serializers.IntegerField()
    treatment_count = serializers.IntegerField()


class PhotoRefSerializer(serializers.Serializer):
    id = serializers.CharField()
    original_path = serializers.CharField()
    thumbnail_path = serializers.CharField(allow_null=True)
    state = serializers.CharField(allow_null=True)


class ComparisonPairSerializer(serializers.Serializer):
    """Before/after photos sharing one (position, state) key."""
    position = serializers.CharField()
    state = serializers.CharField(allow_null=True)
    before_photo = PhotoRefSerializer(source='before', allow_null=True)
    after_photo = PhotoRefSerializer(source='after', allow_null=True)


class CostPreviewRequestSerializer(serializers.Serializer):
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class CostSummarySerializer(serializers.Serializer):
    """Full-precision amounts plus display lines."""
    subtotal = serializers.DecimalField(max_digits=None, decimal_places=None)
    provincial_tax = serializers.DecimalField(max_digits=None, decimal_places=None)
    federal_tax = serializers.DecimalField(max_digits=None, decimal_places=None)
    total = serializers.DecimalField(max_digits=None, decimal_places=None)
    provincial_tax_label = serializers.CharField()
    provincial_tax_rate = serializers.DecimalField(max_digits=None, decimal_places=None)
    federal_tax_label = serializers.CharField()
    federal_tax_rate = serializers.DecimalField(max_digits=None, decimal_places=None)
    lines = serializers.ListField(child=serializers.CharField())
