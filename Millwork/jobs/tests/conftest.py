import pytest

from jobs.models import Client, Project


@pytest.fixture
def project(db):
    client = Client.objects.create(name="Harbour Fitouts", contact_person="Sam Lee", email="sam@example.com")
    return Project.objects.create(client=client, name="Broadbeach Apartments")
