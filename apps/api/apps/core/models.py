"""
Core models: app_settings
"""
import uuid
from decimal import Decimal
from django.db import models


class AppSettings(models.Model):
    """
    Global application settings (single row).
    
    Fields:
    - id: UUID PK
    - clinic_name: report title, blank falls back to settings.DEFAULT_CLINIC_NAME
    - provincial_tax_label / provincial_tax_rate: e.g. QST 9.975 (%)
    - federal_tax_label / federal_tax_rate: e.g. GST 5 (%)
    - created_at, updated_at
    
    Tax rates are percentages. A rate of 0 suppresses the tax line on reports.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    clinic_name = models.CharField(max_length=255, blank=True, default='')
    provincial_tax_label = models.CharField(max_length=50, default='QST')
    provincial_tax_rate = models.DecimalField(
        max_digits=7,
        decimal_places=4,
        default=Decimal('9.975')
    )
    federal_tax_label = models.CharField(max_length=50, default='GST')
    federal_tax_rate = models.DecimalField(
        max_digits=7,
        decimal_places=4,
        default=Decimal('5')
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'app_settings'
        verbose_name = 'App Settings'
        verbose_name_plural = 'App Settings'

    def __str__(self):
        return f"App Settings ({self.clinic_name or 'unnamed clinic'})"

    @classmethod
    def load(cls):
        """Return the settings row, creating it with defaults on first use."""
        instance = cls.objects.order_by('created_at').first()
        if instance is None:
            instance = cls.objects.create()
        return instance
