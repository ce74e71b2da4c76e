"""
Filesystem storage utilities for clinical photos and generated reports.
"""
from pathlib import Path

from django.conf import settings


def get_photo_root() -> Path:
    return Path(settings.PHOTO_STORAGE_ROOT)


def resolve_photo_path(stored_path):
    """
    Absolute path of a stored photo.

    Stored paths are relative to PHOTO_STORAGE_ROOT. Paths escaping the root
    resolve to None, as do blank paths.
    """
    if not stored_path:
        return None
    root = get_photo_root().resolve()
    candidate = (root / stored_path).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


def get_export_dir() -> Path:
    """Report export directory, created on first use."""
    directory = Path(settings.REPORT_EXPORT_ROOT)
    directory.mkdir(parents=True, exist_ok=True)
    return directory
