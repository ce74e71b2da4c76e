from django.contrib import admin
from .models import AppSettings


@admin.register(AppSettings)
class AppSettingsAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'clinic_name',
        'provincial_tax_label',
        'provincial_tax_rate',
        'federal_tax_label',
        'federal_tax_rate',
    ]
    readonly_fields = ['id', 'created_at', 'updated_at']
