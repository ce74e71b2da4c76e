"""
Clinical URLs - case search, visit photo comparison, cost preview.
"""
from django.urls import path

from .views import CaseSearchView, CostPreviewView, VisitPhotoComparisonView

urlpatterns = [
    path('case-search/', CaseSearchView.as_view(), name='case-search'),
    path('visits/compare/', VisitPhotoComparisonView.as_view(), name='visit-photo-compare'),
    path('cost-preview/', CostPreviewView.as_view(), name='cost-preview'),
]
