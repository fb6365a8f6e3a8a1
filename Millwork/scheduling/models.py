# PATH: /Millwork/scheduling/models.py
"""Persistent configuration for the scheduling engine.

Statuses, lead times and holidays are edited by an operator (admin or the
settings API) and rarely change.  Each model can turn itself into the
immutable value record the engine works with; the engine itself never
sees these ORM objects.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F, Q

from .job_dates import DATE_COLUMNS
from .lead_times import DIRECTION_AFTER, DIRECTION_BEFORE, LeadTimeRule
from .pipeline import Stage, TargetColumn
from .working_calendar import Holiday as CalendarHoliday


# ---------------------------------------------------------------------------
# Job statuses (pipeline stages)
# ---------------------------------------------------------------------------
class JobStatus(models.Model):
    """A stage of the production pipeline.

    ``target_columns`` is a list of ``{"column": ..., "color": ...}`` rows
    naming the job date columns that are highlighted while a job is in this
    status.  Valid columns are nesting, machining, assembly and delivery.
    """

    name = models.SlugField(max_length=100, unique=True)
    display_name = models.CharField(max_length=100)
    color = models.CharField(max_length=7, default="#000000")
    background_color = models.CharField(max_length=7, default="#f3f4f6")
    order_index = models.IntegerField(unique=True)
    is_default = models.BooleanField(default=False)
    is_final = models.BooleanField(default=False)
    target_columns = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order_index"]
        verbose_name = "Job status"
        verbose_name_plural = "Job statuses"

    def __str__(self) -> str:
        return self.display_name or self.name

    def clean(self):
        super().clean()
        rows = self.target_columns or []
        if not isinstance(rows, list):
            raise ValidationError({"target_columns": "Target columns must be a list."})
        for row in rows:
            if not isinstance(row, dict) or row.get("column") not in DATE_COLUMNS:
                raise ValidationError({
                    "target_columns": f"Each target needs a column from {', '.join(DATE_COLUMNS)}."
                })
            if not row.get("color"):
                raise ValidationError({"target_columns": "Each target needs a color."})

    def save(self, *args, **kwargs):
        # Only one status may be the default for new jobs.
        with transaction.atomic():
            if self.is_default:
                JobStatus.objects.filter(is_default=True).exclude(pk=self.pk).update(is_default=False)
            super().save(*args, **kwargs)

    def to_stage(self) -> Stage:
        targets = tuple(
            TargetColumn(column=str(row.get("column")), color=str(row.get("color") or ""))
            for row in (self.target_columns or [])
            if isinstance(row, dict) and row.get("column")
        )
        return Stage(
            id=self.pk,
            name=self.name,
            display_name=self.display_name,
            order_index=self.order_index,
            is_default=self.is_default,
            is_final=self.is_final,
            target_columns=targets,
            color=self.color,
            background_color=self.background_color,
        )


# ---------------------------------------------------------------------------
# Lead times
# ---------------------------------------------------------------------------
class LeadTime(models.Model):
    DIRECTION_CHOICES = [
        (DIRECTION_BEFORE, "Before"),
        (DIRECTION_AFTER, "After"),
    ]

    from_status = models.ForeignKey(JobStatus, on_delete=models.CASCADE, related_name="lead_times_from")
    to_status = models.ForeignKey(JobStatus, on_delete=models.CASCADE, related_name="lead_times_to")
    days = models.PositiveIntegerField(default=0)
    direction = models.CharField(max_length=10, choices=DIRECTION_CHOICES, default=DIRECTION_BEFORE)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["from_status", "to_status"], name="unique_lead_time_pair"),
            models.CheckConstraint(condition=~Q(from_status=F("to_status")), name="lead_time_distinct_statuses"),
        ]

    def __str__(self) -> str:
        return f"{self.from_status_id} → {self.to_status_id}: {self.days} days {self.direction}"

    def clean(self):
        super().clean()
        if self.from_status_id and self.from_status_id == self.to_status_id:
            raise ValidationError("A lead time must link two different statuses.")

    def to_rule(self) -> LeadTimeRule:
        return LeadTimeRule(
            id=self.pk,
            from_stage_id=self.from_status_id,
            to_stage_id=self.to_status_id,
            days=self.days,
            direction=self.direction,
            is_active=self.is_active,
        )


# ---------------------------------------------------------------------------
# Holidays
# ---------------------------------------------------------------------------
class Holiday(models.Model):
    name = models.CharField(max_length=255)
    date = models.DateField(unique=True)
    is_public = models.BooleanField(default=True)
    is_custom = models.BooleanField(default=False)
    description = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date"]
        indexes = [models.Index(fields=["is_public"], name="holiday_is_public_idx")]

    def __str__(self) -> str:
        return f"{self.date} - {self.name}"

    def to_holiday(self) -> CalendarHoliday:
        return CalendarHoliday(
            date=self.date,
            name=self.name,
            is_public=self.is_public,
            is_custom=self.is_custom,
            description=self.description or "",
        )
