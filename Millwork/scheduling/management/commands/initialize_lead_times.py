# PATH: /Millwork/scheduling/management/commands/initialize_lead_times.py
from django.core.management.base import BaseCommand, CommandError

from scheduling.exceptions import ConfigurationError
from scheduling.services import initialize_default_lead_times


class Command(BaseCommand):
    help = "Create the default lead time from every non-final status to the final status."

    def add_arguments(self, parser):
        parser.add_argument("--days-per-stage", type=int, default=None,
                            help="Working days per pipeline step (defaults to the project setting).")

    def handle(self, *args, **options):
        try:
            created, skipped = initialize_default_lead_times(options.get("days_per_stage"))
        except ConfigurationError as exc:
            raise CommandError(str(exc)) from exc
        self.stdout.write(self.style.SUCCESS(f"Created {created} lead times, {skipped} already existed."))
