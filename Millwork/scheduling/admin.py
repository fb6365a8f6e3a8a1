# PATH: /Millwork/scheduling/admin.py
from django.contrib import admin
from .models import Holiday, JobStatus, LeadTime


@admin.register(JobStatus)
class JobStatusAdmin(admin.ModelAdmin):
    list_display = ("order_index", "name", "display_name", "is_default", "is_final")
    list_display_links = ("name",)
    search_fields = ("name", "display_name")
    prepopulated_fields = {"name": ("display_name",)}


@admin.register(LeadTime)
class LeadTimeAdmin(admin.ModelAdmin):
    list_display = ("id", "from_status", "to_status", "days", "direction", "is_active")
    list_filter = ("direction", "is_active")
    list_select_related = ("from_status", "to_status")


@admin.register(Holiday)
class HolidayAdmin(admin.ModelAdmin):
    """Holidays grouped by year; custom closures can be filtered out."""
    list_display = ("date", "name", "is_public", "is_custom")
    list_filter = ("is_public", "is_custom")
    search_fields = ("name",)
    date_hierarchy = "date"
