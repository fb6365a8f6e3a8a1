from django.apps import AppConfig


class JobsConfig(AppConfig):
    """Configuration for the jobs app.

    Clients, projects and the production jobs that move through the status
    pipeline.  Dates and status changes are delegated to the scheduling
    app.
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'jobs'
