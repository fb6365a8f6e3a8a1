"""URL configuration for the jobs app.

JSON routes for the job grid plus the spreadsheet export.  Namespacing is
used to prevent conflicts with other apps.
"""

from django.urls import path
from . import views


app_name = 'jobs'

urlpatterns = [
    path('api/', views.api_job_list, name='job_list'),
    path('api/add/', views.api_job_create, name='job_add'),
    path('api/<int:pk>/cycle-status/', views.api_job_cycle_status, name='job_cycle_status'),
    path('api/<int:pk>/reschedule/', views.api_job_reschedule, name='job_reschedule'),
    path('export/xlsx/', views.jobs_export_xlsx, name='export_xlsx'),
]
