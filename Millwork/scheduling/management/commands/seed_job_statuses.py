# PATH: /Millwork/scheduling/management/commands/seed_job_statuses.py
from django.core.management.base import BaseCommand
from django.db import transaction

from scheduling.models import JobStatus

DEFAULT_STATUSES = [
    # name, display name, color, background, order, default, final, targets
    ('not-assigned', 'Not Assigned', '#6B7280', '#F3F4F6', 1, True, False, []),
    ('nesting-complete', 'Nesting Complete', '#059669', '#D1FAE5', 2, False, False,
     [{'column': 'machining', 'color': '#059669'}]),
    ('machining-complete', 'Machining Complete', '#DC2626', '#FEE2E2', 3, False, False,
     [{'column': 'assembly', 'color': '#DC2626'}]),
    ('assembly-complete', 'Assembly Complete', '#7C2D12', '#FED7AA', 4, False, False,
     [{'column': 'delivery', 'color': '#7C2D12'}]),
    ('delivered', 'Delivered', '#16A34A', '#DCFCE7', 5, False, True, []),
]


class Command(BaseCommand):
    help = "Create the default job status pipeline (statuses that already exist are kept)."

    @transaction.atomic
    def handle(self, *args, **options):
        if JobStatus.objects.exists():
            self.stdout.write("Job statuses already configured; nothing to do.")
            return
        for name, display, color, background, order, is_default, is_final, targets in DEFAULT_STATUSES:
            JobStatus.objects.create(
                name=name,
                display_name=display,
                color=color,
                background_color=background,
                order_index=order,
                is_default=is_default,
                is_final=is_final,
                target_columns=targets,
            )
        self.stdout.write(self.style.SUCCESS(f"Created {len(DEFAULT_STATUSES)} job statuses."))
