"""
Before/after photo pairing across two visits.

Photos are aligned on the composite key (position, state). A missing state
keys as the empty string, so stateless photos only pair with stateless
photos. Photos without a position never take part in pairing.
"""
from dataclasses import dataclass
from typing import List, Optional

from apps.clinical.models import ClinicalPhoto, Visit


@dataclass(frozen=True)
class PhotoRef:
    id: str
    original_path: str
    thumbnail_path: Optional[str]
    state: Optional[str]

    @classmethod
    def from_photo(cls, photo):
        return cls(
            id=str(photo.id),
            original_path=photo.original_path,
            thumbnail_path=photo.thumbnail_path,
            state=photo.photo_state,
        )


@dataclass(frozen=True)
class ComparisonPair:
    """One composite key with whichever sides exist; at least one side is set."""
    position: str
    state: Optional[str]
    before: Optional[PhotoRef]
    after: Optional[PhotoRef]


def photo_key(photo):
    """(position, state) key, or None when the photo has no position."""
    if not photo.photo_position:
        return None
    return (photo.photo_position, photo.photo_state or '')


def _first_by_key(photos):
    # First occurrence wins; later duplicates of a key are ignored.
    first = {}
    for photo in photos:
        key = photo_key(photo)
        if key is not None and key not in first:
            first[key] = photo
    return first


def pair_photos(before, after) -> List[ComparisonPair]:
    """
    Pair two ordered photo sets on (position, state).

    Output has one pair per key found in either set, sorted by position then
    state (empty state first).
    """
    before_by_key = _first_by_key(before)
    after_by_key = _first_by_key(after)

    pairs = []
    for key in sorted(set(before_by_key) | set(after_by_key)):
        position, state = key
        before_photo = before_by_key.get(key)
        after_photo = after_by_key.get(key)
        pairs.append(ComparisonPair(
            position=position,
            state=state or None,
            before=PhotoRef.from_photo(before_photo) if before_photo else None,
            after=PhotoRef.from_photo(after_photo) if after_photo else None,
        ))
    return pairs


def visit_photos(visit_id):
    """Non-deleted photos of a visit in display order."""
    return list(
        ClinicalPhoto.objects
        .filter(visit_id=visit_id, is_deleted=False)
        .order_by('sort_order', 'created_at')
    )


def compare_visit_photos(before_visit_id, after_visit_id):
    """
    Pair the photos of two visits.

    Raises Visit.DoesNotExist if either visit is missing or soft-deleted.
    """
    before_visit = Visit.objects.get(id=before_visit_id, is_deleted=False)
    after_visit = Visit.objects.get(id=after_visit_id, is_deleted=False)
    return pair_photos(visit_photos(before_visit.id), visit_photos(after_visit.id))


def first_photo_for_item(visit_id, position, state=None):
    """
    Photo shown for a portfolio item in one visit.

    Position must match; state must match only when the item names one.
    """
    if not visit_id or not position:
        return None
    queryset = ClinicalPhoto.objects.filter(
        visit_id=visit_id,
        is_deleted=False,
        photo_position=position,
    )
    if state:
        queryset = queryset.filter(photo_state=state)
    return queryset.order_by('sort_order', 'created_at').first()
