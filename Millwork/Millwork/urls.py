# PATH: /Millwork/Millwork/urls.py
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView
from django.conf import settings
from .views import health_view

urlpatterns = [
    path('admin/', admin.site.urls),

    # Landing goes to the admin; the apps below are JSON endpoints.
    path('', RedirectView.as_view(pattern_name='admin:index', permanent=False)),
    path('health/', health_view, name='health'),

    # Statuses, lead times, holidays and the date calculator
    path('scheduling/', include('scheduling.urls')),

    # Jobs app routes (grid rows, add, status click, reschedule, export)
    path('jobs/', include('jobs.urls')),
]

if settings.DEBUG:
    from django.conf.urls.static import static
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
