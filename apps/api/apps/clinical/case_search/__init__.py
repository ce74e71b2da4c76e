"""
Case search: find patients matching a sparse set of clinical criteria.
"""
from .compiler import CaseResult, compile_predicates, search_cases
from .filters import SearchFilter
from .predicates import build_predicates

__all__ = [
    'CaseResult',
    'SearchFilter',
    'build_predicates',
    'compile_predicates',
    'search_cases',
]
