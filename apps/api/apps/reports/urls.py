"""
Report URLs - visit and portfolio PDF exports.
"""
from django.urls import path

from .views import PortfolioReportExportView, VisitReportExportView

urlpatterns = [
    path('visits/<uuid:pk>/', VisitReportExportView.as_view(), name='visit-report-export'),
    path('portfolios/<uuid:pk>/', PortfolioReportExportView.as_view(), name='portfolio-report-export'),
]
