"""URL configuration for the scheduling app.

Every route returns JSON.  Statuses, lead times and holidays mirror the
settings screens of the job grid; ``api/schedule/`` is the scheduling
request used when a job's delivery date is entered.
"""

from django.urls import path
from . import views


app_name = 'scheduling'

urlpatterns = [
    path('api/statuses/', views.api_statuses, name='statuses'),
    path('api/statuses/advance/', views.api_status_advance, name='status_advance'),
    path('api/statuses/reorder/', views.api_status_reorder, name='status_reorder'),
    path('api/lead-times/', views.api_lead_times, name='lead_times'),
    path('api/lead-times/status/<int:status_id>/', views.api_lead_times_for_status, name='lead_times_for_status'),
    path('api/lead-times/initialize/', views.api_lead_times_initialize, name='lead_times_initialize'),
    path('api/holidays/', views.api_holidays, name='holidays'),
    path('api/holidays/year/<int:year>/', views.api_holidays_for_year, name='holidays_for_year'),
    path('api/calendar/check/', views.api_calendar_check, name='calendar_check'),
    path('api/schedule/', views.api_schedule, name='schedule'),
]
