"""
Admin configuration for the jobs app.

Registers clients, projects and jobs so that administrators can manage
them via the Django admin interface.
"""

from django.contrib import admin
from .models import Client, Job, Project


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("name", "contact_person", "email", "phone", "is_active", "archived")
    search_fields = ("name", "contact_person", "email")
    list_filter = ("is_active", "archived")


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("name", "client", "status", "start_date", "end_date")
    search_fields = ("name", "client__name")
    list_select_related = ("client",)


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    """Jobs with their scheduled stage dates."""
    list_display = ("id", "unit", "project", "status", "nesting_date", "machining_date", "assembly_date", "delivery_date")
    search_fields = ("unit", "items", "project__name", "project__client__name")
    list_filter = ("status",)
    list_select_related = ("project", "status")
