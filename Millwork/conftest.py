import datetime
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from scheduling.lead_times import LeadTimeRegistry, LeadTimeRule
from scheduling.pipeline import Stage, StatusPipeline, TargetColumn
from scheduling.working_calendar import Holiday, WorkingCalendar

# Stage ids used by the in-memory pipeline fixture.
NOT_ASSIGNED, NESTING, MACHINING, ASSEMBLY, DELIVERED = 1, 2, 3, 4, 5


@pytest.fixture
def pipeline():
    return StatusPipeline([
        Stage(NOT_ASSIGNED, "not-assigned", "Not Assigned", 1, is_default=True),
        Stage(NESTING, "nesting-complete", "Nesting Complete", 2,
              target_columns=(TargetColumn("machining", "#059669"),)),
        Stage(MACHINING, "machining-complete", "Machining Complete", 3,
              target_columns=(TargetColumn("assembly", "#DC2626"),)),
        Stage(ASSEMBLY, "assembly-complete", "Assembly Complete", 4,
              target_columns=(TargetColumn("delivery", "#7C2D12"),)),
        Stage(DELIVERED, "delivered", "Delivered", 5, is_final=True),
    ])


@pytest.fixture
def chained_rules():
    # assembly 3 days before delivery, machining and nesting 2 days before the next stage
    return [
        LeadTimeRule(1, ASSEMBLY, DELIVERED, 3),
        LeadTimeRule(2, MACHINING, ASSEMBLY, 2),
        LeadTimeRule(3, NESTING, MACHINING, 2),
    ]


@pytest.fixture
def registry(pipeline, chained_rules):
    return LeadTimeRegistry(chained_rules, pipeline=pipeline)


@pytest.fixture
def calendar():
    return WorkingCalendar()


@pytest.fixture
def holiday_calendar():
    return WorkingCalendar([Holiday(datetime.date(2025, 9, 16), "Shop closure", is_public=False, is_custom=True)])


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def user(db):
    return get_user_model().objects.create_user(username="tester", password="pass")


@pytest.fixture
def staff(db):
    return get_user_model().objects.create_user(username="manager", password="pass", is_staff=True)


@pytest.fixture
def statuses(db):
    """The seeded five-status pipeline, keyed by status name."""
    from scheduling.models import JobStatus

    call_command("seed_job_statuses", stdout=StringIO())
    return {status.name: status for status in JobStatus.objects.all()}


@pytest.fixture
def chained_lead_times(statuses):
    from scheduling.models import LeadTime

    return [
        LeadTime.objects.create(from_status=statuses["assembly-complete"], to_status=statuses["delivered"], days=3),
        LeadTime.objects.create(from_status=statuses["machining-complete"], to_status=statuses["assembly-complete"], days=2),
        LeadTime.objects.create(from_status=statuses["nesting-complete"], to_status=statuses["machining-complete"], days=2),
    ]
