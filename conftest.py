"""
Pytest configuration for the entire test suite.

The ini options select config.settings_test (in-memory SQLite) before
pytest-django sets Django up; photo storage and report exports are pointed
at per-test temporary directories by the fixtures in apps/api/tests/conftest.py.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings_test')
