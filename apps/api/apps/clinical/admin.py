from django.contrib import admin
from .models import (
    Patient, Visit, Product, TreatedArea, TreatmentCategory, Treatment,
    TreatmentArea, Annotation, Consent, ClinicalPhoto, Portfolio, PortfolioItem
)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ['first_name', 'last_name', 'email', 'phone', 'city', 'is_deleted', 'created_at']
    list_filter = ['sex', 'province', 'is_deleted']
    search_fields = ['first_name', 'last_name', 'email', 'phone']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']

    fieldsets = (
        ('Basic Info', {
            'fields': ('id', 'first_name', 'last_name', 'birth_date', 'sex', 'ethnicity')
        }),
        ('Contact', {
            'fields': ('email', 'phone', 'city', 'province')
        }),
        ('Soft Delete', {
            'fields': ('is_deleted', 'deleted_at')
        }),
        ('Audit', {
            'fields': ('created_at', 'updated_at')
        }),
    )


class TreatmentAreaInline(admin.TabularInline):
    model = TreatmentArea
    extra = 0
    autocomplete_fields = ['treated_area']


class AnnotationInline(admin.TabularInline):
    model = Annotation
    extra = 0


@admin.register(Visit)
class VisitAdmin(admin.ModelAdmin):
    list_display = ['patient', 'date', 'time', 'practitioner', 'is_deleted']
    list_filter = ['is_deleted', 'date']
    search_fields = ['patient__first_name', 'patient__last_name']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    autocomplete_fields = ['patient', 'practitioner']
    date_hierarchy = 'date'


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'brand', 'category', 'unit_type', 'is_active']
    list_filter = ['category', 'is_active']
    search_fields = ['name', 'brand']
    readonly_fields = ['id', 'created_at', 'updated_at']


@admin.register(TreatedArea)
class TreatedAreaAdmin(admin.ModelAdmin):
    list_display = ['name', 'is_active']
    search_fields = ['name']
    readonly_fields = ['id', 'created_at', 'updated_at']


@admin.register(TreatmentCategory)
class TreatmentCategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'type', 'sort_order', 'is_active']
    list_filter = ['type', 'is_active']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Treatment)
class TreatmentAdmin(admin.ModelAdmin):
    list_display = ['visit', 'product', 'treatment_type', 'lot_number', 'total_units', 'total_cost', 'is_deleted']
    list_filter = ['treatment_type', 'is_deleted']
    search_fields = ['lot_number', 'visit__patient__last_name']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    autocomplete_fields = ['visit', 'product']
    inlines = [TreatmentAreaInline, AnnotationInline]


@admin.register(Consent)
class ConsentAdmin(admin.ModelAdmin):
    list_display = ['patient', 'consent_type', 'visit', 'signed_at']
    list_filter = ['consent_type']
    search_fields = ['patient__first_name', 'patient__last_name']
    readonly_fields = ['id', 'created_at']
    autocomplete_fields = ['patient', 'visit']


@admin.register(ClinicalPhoto)
class ClinicalPhotoAdmin(admin.ModelAdmin):
    list_display = ['patient', 'visit', 'photo_position', 'photo_state', 'sort_order', 'is_deleted']
    list_filter = ['photo_position', 'photo_state', 'is_deleted']
    search_fields = ['patient__first_name', 'patient__last_name', 'original_path']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    autocomplete_fields = ['patient', 'visit']


class PortfolioItemInline(admin.TabularInline):
    model = PortfolioItem
    extra = 0
    autocomplete_fields = ['patient', 'before_visit', 'after_visit']


@admin.register(Portfolio)
class PortfolioAdmin(admin.ModelAdmin):
    list_display = ['title', 'category', 'owner', 'is_deleted', 'created_at']
    list_filter = ['category', 'is_deleted']
    search_fields = ['title']
    readonly_fields = ['id', 'created_at', 'updated_at', 'deleted_at']
    inlines = [PortfolioItemInline]
