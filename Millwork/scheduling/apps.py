from django.apps import AppConfig


class SchedulingConfig(AppConfig):
    """Configuration for the scheduling app.

    Holds the job status pipeline, the lead times between statuses and the
    holiday calendar, together with the backward scheduler that turns a
    delivery date into nesting, machining and assembly dates.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'scheduling'
