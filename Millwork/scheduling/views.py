"""JSON endpoints for the scheduling configuration and engine.

Reads are open to any signed-in user; changes to statuses and lead times
are limited to staff.  Errors raised inside a view are returned as JSON
with a status code chosen by ``engine_errors``.
"""

from __future__ import annotations

import json
import logging
from functools import wraps

from django.contrib.auth.decorators import login_required, user_passes_test
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from . import services
from .dates import format_date, parse_date
from .exceptions import ConfigurationError, InvalidInput
from .lead_times import LeadTimeRule
from .models import Holiday, JobStatus, LeadTime
from .pipeline import Stage

logger = logging.getLogger(__name__)


# ------------------------------
# Helpers
# ------------------------------

def is_settings_manager(user) -> bool:
    """Only staff may change scheduling configuration."""
    return bool(user.is_staff or user.is_superuser)


def error_response(message: str, status: int) -> JsonResponse:
    return JsonResponse({"ok": False, "error": message}, status=status)


def engine_errors(view):
    """Translate engine exceptions raised by ``view`` into JSON errors."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except InvalidInput as exc:
            return error_response(str(exc), 400)
        except ConfigurationError as exc:
            logger.error("Scheduling configuration error: %s", exc)
            return error_response(str(exc), 409)
        except Http404 as exc:
            return error_response(str(exc) or "Not found.", 404)

    return wrapper


def read_json(request) -> dict:
    """Decode a JSON object body; form posts fall back to ``request.POST``."""
    if request.content_type != "application/json":
        return request.POST.dict()
    try:
        data = json.loads(request.body.decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        raise InvalidInput("Request body is not valid JSON.") from None
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object.")
    return data


def parse_id(value, label: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Invalid {label}: {value!r}.") from None


def stage_payload(stage: Stage) -> dict:
    return {
        "id": stage.id,
        "name": stage.name,
        "displayName": stage.display_name,
        "orderIndex": stage.order_index,
        "isDefault": stage.is_default,
        "isFinal": stage.is_final,
        "color": stage.color,
        "backgroundColor": stage.background_color,
        "targetColumns": [
            {"column": target.column, "color": target.color} for target in stage.target_columns
        ],
    }


def rule_payload(rule: LeadTimeRule) -> dict:
    return {
        "id": rule.id,
        "fromStatusId": rule.from_stage_id,
        "toStatusId": rule.to_stage_id,
        "days": rule.days,
        "direction": rule.direction,
        "isActive": rule.is_active,
    }


def holiday_payload(holiday: Holiday) -> dict:
    return {
        "id": holiday.pk,
        "name": holiday.name,
        "date": format_date(holiday.date),
        "isPublic": holiday.is_public,
        "isCustom": holiday.is_custom,
        "description": holiday.description,
    }


# ------------------------------
# Job statuses
# ------------------------------

@require_GET
@login_required
def api_statuses(request):
    pipeline = services.load_pipeline()
    return JsonResponse({"statuses": [stage_payload(stage) for stage in pipeline]})


@require_POST
@login_required
@engine_errors
def api_status_advance(request):
    """Return the status that follows ``currentStageId`` in pipeline order."""
    data = read_json(request)
    current_id = parse_id(data.get("currentStageId"), "currentStageId")
    snapshot = services.take_snapshot()
    next_stage = snapshot.cycler().next_stage(current_id)
    return JsonResponse({
        "ok": True,
        "currentStageId": current_id,
        "nextStageId": next_stage.id,
        "nextStage": stage_payload(next_stage),
    })


@require_POST
@login_required
@user_passes_test(is_settings_manager)
@engine_errors
def api_status_reorder(request):
    data = read_json(request)
    raw_orders = data.get("statusOrders")
    if not isinstance(raw_orders, list):
        raise InvalidInput("statusOrders must be an array.")
    orders = []
    for row in raw_orders:
        if not isinstance(row, dict):
            raise InvalidInput("Each statusOrders entry must be an object.")
        orders.append((parse_id(row.get("id"), "id"), parse_id(row.get("orderIndex"), "orderIndex")))
    statuses = services.reorder_statuses(orders)
    return JsonResponse({"ok": True, "statuses": [stage_payload(s.to_stage()) for s in statuses]})


# ------------------------------
# Lead times
# ------------------------------

@require_http_methods(["GET", "POST"])
@login_required
@engine_errors
def api_lead_times(request):
    if request.method == "GET":
        rules = [lt.to_rule() for lt in LeadTime.objects.order_by("from_status_id", "to_status_id")]
        return JsonResponse({"leadTimes": [rule_payload(rule) for rule in rules]})

    if not is_settings_manager(request.user):
        return error_response("Only staff can change lead times.", 403)
    data = read_json(request)
    if data.get("fromStatusId") in (None, "") or data.get("toStatusId") in (None, "") or data.get("days") is None:
        raise InvalidInput("Missing required fields: fromStatusId, toStatusId, days")
    lead_time, created = services.upsert_lead_time(
        parse_id(data.get("fromStatusId"), "fromStatusId"),
        parse_id(data.get("toStatusId"), "toStatusId"),
        data.get("days"),
        direction=data.get("direction") or None,
        is_active=data.get("isActive"),
    )
    return JsonResponse(rule_payload(lead_time.to_rule()), status=201 if created else 200)


@require_GET
@login_required
@engine_errors
def api_lead_times_for_status(request, status_id: int):
    status = get_object_or_404(JobStatus, pk=status_id)
    rules = [lt.to_rule() for lt in LeadTime.objects.filter(from_status=status).order_by("id")]
    return JsonResponse({"leadTimes": [rule_payload(rule) for rule in rules]})


@require_POST
@login_required
@user_passes_test(is_settings_manager)
@engine_errors
def api_lead_times_initialize(request):
    created, skipped = services.initialize_default_lead_times()
    return JsonResponse({
        "ok": True,
        "message": "Default lead times initialized successfully",
        "count": created + skipped,
        "created": created,
        "skipped": skipped,
    })


# ------------------------------
# Holidays and calendar
# ------------------------------

@require_GET
@login_required
def api_holidays(request):
    return JsonResponse({"holidays": [holiday_payload(h) for h in Holiday.objects.order_by("date")]})


@require_GET
@login_required
def api_holidays_for_year(request, year: int):
    return JsonResponse({"holidays": [holiday_payload(h) for h in services.holidays_for_year(year)]})


@require_GET
@login_required
@engine_errors
def api_calendar_check(request):
    """Tell whether ``?date=DD/MM/YYYY`` is a working day."""
    day = parse_date(request.GET.get("date") or "")
    calendar = services.take_snapshot().calendar
    holiday = calendar.holiday_on(day)
    return JsonResponse({
        "date": format_date(day),
        "isWorkingDay": calendar.is_working_day(day),
        "isWeekend": calendar.is_weekend(day),
        "holiday": holiday.name if holiday else None,
        "previousWorkingDay": format_date(calendar.previous_working_day(day)),
    })


# ------------------------------
# Scheduling
# ------------------------------

@require_POST
@login_required
@engine_errors
def api_schedule(request):
    """Compute upstream stage dates for ``deliveryDate`` (DD/MM/YYYY)."""
    data = read_json(request)
    delivery = data.get("deliveryDate")
    if not delivery:
        raise InvalidInput("deliveryDate is required.")
    snapshot = services.take_snapshot()
    return JsonResponse({"ok": True, "dates": snapshot.job_dates(delivery)})
