# jobs/forms.py
from django import forms

from scheduling.forms import DayMonthYearDateField

from .models import Job


class JobCreateForm(forms.ModelForm):
    """New job as entered in the Add Job dialog.

    Only the delivery date is collected; the upstream dates are scheduled
    from it by ``jobs.services.create_job``.
    """

    delivery_date = DayMonthYearDateField(required=False)

    class Meta:
        model = Job
        fields = ["project", "unit", "job_type", "items", "comments"]

    def clean_unit(self):
        unit = (self.cleaned_data.get("unit") or "").strip()
        if not unit:
            raise forms.ValidationError("Unit is required.")
        return unit
