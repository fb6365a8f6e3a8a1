# PATH: /Millwork/Millwork/views.py
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from scheduling.models import Holiday, JobStatus, LeadTime


@require_GET
def health_view(request):
    """Report whether the scheduling tables hold enough data to schedule jobs."""
    statuses = JobStatus.objects.count()
    lead_times = LeadTime.objects.filter(is_active=True).count()
    return JsonResponse({
        "ok": True,
        "statuses": statuses,
        "activeLeadTimes": lead_times,
        "holidays": Holiday.objects.count(),
        "hasDefaultStatus": JobStatus.objects.filter(is_default=True).exists(),
        "hasFinalStatus": JobStatus.objects.filter(is_final=True).exists(),
    })
