"""
SearchFilter: the sparse set of optional case search criteria.
"""
from dataclasses import dataclass, fields
from datetime import date
from typing import List, Optional


@dataclass
class SearchFilter:
    """
    Every field is optional; an absent field means "no constraint".

    Absent is None, an empty string, an empty list, or a consent flag that
    is not True. Numeric zero is present (age_min=0 still constrains).
    """
    # Patient demographics
    ethnicity: Optional[str] = None
    sex: Optional[str] = None
    age_min: Optional[int] = None
    age_max: Optional[int] = None
    min_visits: Optional[int] = None

    # Consent status
    has_botulinum_consent: Optional[bool] = None
    has_filler_consent: Optional[bool] = None
    has_photo_consent: Optional[bool] = None

    # Visit filters
    visit_date_from: Optional[date] = None
    visit_date_to: Optional[date] = None
    lot_number: Optional[str] = None
    practitioner_id: Optional[str] = None

    # Treatment filters
    product_ids: Optional[List[str]] = None
    treatment_category_slugs: Optional[List[str]] = None
    treated_area_ids: Optional[List[str]] = None

    def is_present(self, name):
        value = getattr(self, name)
        if isinstance(value, bool) or name.startswith('has_'):
            return value is True
        if value is None:
            return False
        if isinstance(value, (str, list, tuple)):
            return len(value) > 0
        return True

    def present_fields(self):
        """Names of the fields that constrain the search, in declaration order."""
        return [f.name for f in fields(self) if self.is_present(f.name)]

    @classmethod
    def from_dict(cls, data):
        """Build from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
