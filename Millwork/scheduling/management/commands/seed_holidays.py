# PATH: /Millwork/scheduling/management/commands/seed_holidays.py
import datetime

from django.core.management.base import BaseCommand

from scheduling.models import Holiday

# Gold Coast, Queensland public holidays.
PUBLIC_HOLIDAYS = {
    2025: [
        ("New Year's Day", datetime.date(2025, 1, 1), "Public holiday - New Year's Day"),
        ("Australia Day", datetime.date(2025, 1, 27), "Public holiday - Australia Day"),
        ("Good Friday", datetime.date(2025, 4, 18), "Public holiday - Good Friday"),
        ("Easter Saturday", datetime.date(2025, 4, 19), "Public holiday - Easter Saturday"),
        ("Easter Monday", datetime.date(2025, 4, 21), "Public holiday - Easter Monday"),
        ("Anzac Day", datetime.date(2025, 4, 25), "Public holiday - Anzac Day"),
        ("Labour Day", datetime.date(2025, 5, 5), "Public holiday - Labour Day (Queensland)"),
        ("King's Birthday", datetime.date(2025, 6, 9), "Public holiday - King's Birthday (Queensland)"),
        ("Ekka Wednesday", datetime.date(2025, 8, 13), "Public holiday - Royal Queensland Show Day (Brisbane area)"),
        ("Christmas Day", datetime.date(2025, 12, 25), "Public holiday - Christmas Day"),
        ("Boxing Day", datetime.date(2025, 12, 26), "Public holiday - Boxing Day"),
    ],
    2026: [
        ("New Year's Day", datetime.date(2026, 1, 1), "Public holiday - New Year's Day"),
        ("Australia Day", datetime.date(2026, 1, 26), "Public holiday - Australia Day"),
        ("Good Friday", datetime.date(2026, 4, 3), "Public holiday - Good Friday"),
        ("Easter Saturday", datetime.date(2026, 4, 4), "Public holiday - Easter Saturday"),
        ("Easter Monday", datetime.date(2026, 4, 6), "Public holiday - Easter Monday"),
        ("Anzac Day", datetime.date(2026, 4, 25), "Public holiday - Anzac Day"),
        ("Labour Day", datetime.date(2026, 5, 4), "Public holiday - Labour Day (Queensland)"),
        ("King's Birthday", datetime.date(2026, 6, 8), "Public holiday - King's Birthday (Queensland)"),
        ("Ekka Wednesday", datetime.date(2026, 8, 12), "Public holiday - Royal Queensland Show Day (Brisbane area)"),
        ("Christmas Day", datetime.date(2026, 12, 25), "Public holiday - Christmas Day"),
        ("Boxing Day", datetime.date(2026, 12, 26), "Public holiday - Boxing Day"),
    ],
}


class Command(BaseCommand):
    help = "Seed the yearly public holidays. Dates that already have a holiday are left alone."

    def add_arguments(self, parser):
        parser.add_argument("--year", type=int, action="append", dest="years",
                            help="Only seed the given year (repeatable).")

    def handle(self, *args, **options):
        years = options.get("years") or sorted(PUBLIC_HOLIDAYS)
        created = 0
        for year in years:
            rows = PUBLIC_HOLIDAYS.get(year)
            if not rows:
                self.stdout.write(self.style.WARNING(f"No public holidays known for {year}."))
                continue
            for name, date, description in rows:
                _, was_created = Holiday.objects.get_or_create(
                    date=date,
                    defaults={
                        "name": name,
                        "description": description,
                        "is_public": True,
                        "is_custom": False,
                    },
                )
                created += int(was_created)
        if created:
            self.stdout.write(self.style.SUCCESS(f"Created {created} holidays."))
        else:
            self.stdout.write("No holidays required seeding.")
