"""Views for the jobs app.

JSON endpoints behind the job grid: listing rows with their status
colouring, creating a job from the Add Job dialog, clicking a status to
advance it and re-running the scheduler after a delivery date change.  The
grid can also be downloaded as a spreadsheet.
"""

from __future__ import annotations

from django.contrib.auth.decorators import login_required
from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from scheduling.services import load_pipeline
from scheduling.status_styles import column_style
from scheduling.views import engine_errors, read_json
from utils.xlsx import build_table_response

from .forms import JobCreateForm
from .models import Job
from .services import create_job, cycle_job_status, reschedule_job, serialize_job

EXPORT_COLUMNS = [
    # header, width, value getter, date column highlighted by the status
    ("Job #", 10, lambda job: job.pk, None),
    ("Client", 24, lambda job: job.project.client.name, None),
    ("Project", 24, lambda job: job.project.name, None),
    ("Unit", 14, lambda job: job.unit, None),
    ("Type", 14, lambda job: job.job_type, None),
    ("Items", 30, lambda job: job.items, None),
    ("Status", 20, lambda job: job.status.display_name if job.status else "", None),
    ("Nesting", 14, lambda job: job.nesting_date, "nesting"),
    ("Machining", 14, lambda job: job.machining_date, "machining"),
    ("Assembly", 14, lambda job: job.assembly_date, "assembly"),
    ("Delivery", 14, lambda job: job.delivery_date, "delivery"),
    ("Comments", 30, lambda job: job.comments, None),
]

# Free-text columns are left aligned in the export.
TEXT_COLUMNS = {1, 2, 5, 11}


def _filtered_jobs(request):
    qs = Job.objects.select_related("project__client", "status")
    project_id = (request.GET.get("project") or "").strip()
    status_name = (request.GET.get("status") or "").strip()
    search = (request.GET.get("search") or "").strip()
    if project_id.isdigit():
        qs = qs.filter(project_id=int(project_id))
    if status_name:
        qs = qs.filter(status__name=status_name)
    if search:
        qs = qs.filter(
            Q(unit__icontains=search) |
            Q(items__icontains=search) |
            Q(project__name__icontains=search) |
            Q(project__client__name__icontains=search)
        )
    return qs


@require_GET
@login_required
def api_job_list(request):
    stages = {stage.id: stage for stage in load_pipeline()}
    return JsonResponse({"jobs": [serialize_job(job, stages) for job in _filtered_jobs(request)]})


@require_POST
@login_required
@engine_errors
def api_job_create(request):
    form = JobCreateForm(read_json(request))
    if not form.is_valid():
        return JsonResponse({"ok": False, "errors": form.errors.get_json_data()}, status=400)
    data = form.cleaned_data
    job = create_job(
        data["project"],
        delivery_date=data.get("delivery_date"),
        unit=data["unit"],
        job_type=data.get("job_type") or "",
        items=data.get("items") or "",
        comments=data.get("comments") or "",
    )
    return JsonResponse({"ok": True, "job": serialize_job(job)}, status=201)


@require_POST
@login_required
@engine_errors
def api_job_cycle_status(request, pk: int):
    job = get_object_or_404(Job, pk=pk)
    cycle_job_status(job)
    job.refresh_from_db()
    return JsonResponse({"ok": True, "job": serialize_job(job)})


@require_POST
@login_required
@engine_errors
def api_job_reschedule(request, pk: int):
    """Re-run the scheduler for a job, optionally with a new ``deliveryDate``."""
    job = get_object_or_404(Job, pk=pk)
    data = read_json(request)
    updated = reschedule_job(job, delivery_date=data.get("deliveryDate"))
    return JsonResponse({"ok": True, "updated": updated, "job": serialize_job(job)})


@require_GET
@login_required
def jobs_export_xlsx(request):
    """Export the filtered job grid, keeping each status's column highlight."""
    jobs = list(_filtered_jobs(request))
    stages = {stage.id: stage for stage in load_pipeline()}

    rows, fills = [], []
    for job in jobs:
        stage = stages.get(job.status_id)
        rows.append([getter(job) for _, _, getter, _ in EXPORT_COLUMNS])
        row_fill = {}
        for index, (_, _, _, date_column) in enumerate(EXPORT_COLUMNS):
            style = column_style(stage, date_column) if date_column else {}
            if style:
                row_fill[index] = style["backgroundColor"]
        fills.append(row_fill)

    return build_table_response(
        filename="jobs.xlsx",
        sheet_title="Jobs",
        report_title="Production jobs",
        headers=[header for header, _, _, _ in EXPORT_COLUMNS],
        rows=rows,
        column_widths=[width for _, width, _, _ in EXPORT_COLUMNS],
        table_name="Jobs",
        text_columns=TEXT_COLUMNS,
        fills=fills,
    )
