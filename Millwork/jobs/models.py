"""Models for the jobs app.

Clients own projects and projects own jobs.  A ``Job`` is one unit of
joinery moving through the status pipeline; it tracks its current status
and the four stage dates (nesting, machining, assembly, delivery) that the
scheduler fills in from the delivery date.
"""

from __future__ import annotations

from django.db import models

from scheduling.models import JobStatus


class Client(models.Model):
    name = models.CharField(max_length=255, unique=True)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    address = models.TextField(blank=True, default="")
    contact_person = models.CharField(max_length=255, blank=True, default="")
    notes = models.TextField(blank=True, default="")
    is_active = models.BooleanField(default=True)
    archived = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Project(models.Model):
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="projects")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    status = models.CharField(max_length=50, blank=True, default="active")
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["client", "name"], name="unique_project_per_client"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.client})"


class Job(models.Model):
    """A production job and its scheduled stage dates.

    Stage dates are optional: a date the scheduler could not determine
    stays empty rather than being set to a placeholder.
    """

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="jobs")
    unit = models.CharField(max_length=100)
    job_type = models.CharField(max_length=100, blank=True, default="")
    items = models.TextField(blank=True, default="")
    status = models.ForeignKey(JobStatus, on_delete=models.PROTECT, null=True, blank=True, related_name="jobs")
    nesting_date = models.DateField(null=True, blank=True)
    machining_date = models.DateField(null=True, blank=True)
    assembly_date = models.DateField(null=True, blank=True)
    delivery_date = models.DateField(null=True, blank=True)
    comments = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Job date field for each date column used by the scheduler.
    DATE_FIELDS = {
        "nesting": "nesting_date",
        "machining": "machining_date",
        "assembly": "assembly_date",
        "delivery": "delivery_date",
    }

    class Meta:
        ordering = ["delivery_date", "id"]
        verbose_name = "Job"
        verbose_name_plural = "Jobs"

    def __str__(self) -> str:
        return f"Job #{self.pk} {self.unit}"
