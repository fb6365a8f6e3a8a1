# scheduling/forms.py
from django import forms

from .dates import format_date, parse_optional_date
from .exceptions import InvalidInput


class DayMonthYearDateField(forms.Field):
    """Form field for DD/MM/YYYY dates, the format used across the job grid."""

    default_error_messages = {
        'invalid': 'Enter a valid date in DD/MM/YYYY format.',
    }

    def to_python(self, value):
        try:
            return parse_optional_date(value)
        except InvalidInput:
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid') from None

    def prepare_value(self, value):
        if hasattr(value, 'strftime'):
            return format_date(value)
        return value
