"""
Shared pytest fixtures and factory_boy factories.

RUNNING TESTS:
    pytest
    pytest tests/test_proposal_lifecycle.py -v
"""
from decimal import Decimal

import factory
import pytest
from factory.django import DjangoModelFactory


# ============================================================================
# FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    class Meta:
        model = "users.User"

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda o: f"{o.username}@example.com")
    password = factory.django.Password("testpass123")
    role = "client"
    is_active = True


class ClientFactory(UserFactory):
    username = factory.Sequence(lambda n: f"client{n}")
    role = "client"


class FreelancerFactory(UserFactory):
    username = factory.Sequence(lambda n: f"freelancer{n}")
    role = "freelancer"


class SkillFactory(DjangoModelFactory):
    class Meta:
        model = "projects.Skill"
        django_get_or_create = ("name",)

    name = factory.Sequence(lambda n: f"skill-{n}")


class ProjectFactory(DjangoModelFactory):
    class Meta:
        model = "projects.Project"

    client = factory.SubFactory(ClientFactory)
    title = factory.Sequence(lambda n: f"Landing page #{n}")
    description = "Build a responsive landing page with a contact form."
    category = "web_development"
    budget_min = Decimal("500.00")
    budget_max = Decimal("1500.00")
    timeline = "1 month"
    status = "open"


class ProposalFactory(DjangoModelFactory):
    class Meta:
        model = "applications.Proposal"

    project = factory.SubFactory(ProjectFactory)
    freelancer = factory.SubFactory(FreelancerFactory)
    proposal_text = "I have shipped a dozen landing pages like this one."
    bid = Decimal("1000.00")
    timeline = "2 weeks"
    status = "pending"


# ============================================================================
# PYTEST FIXTURES
# ============================================================================

@pytest.fixture
def user_factory(db):
    return UserFactory


@pytest.fixture
def client_factory(db):
    return ClientFactory


@pytest.fixture
def freelancer_factory(db):
    return FreelancerFactory


@pytest.fixture
def skill_factory(db):
    return SkillFactory


@pytest.fixture
def project_factory(db):
    return ProjectFactory


@pytest.fixture
def proposal_factory(db):
    return ProposalFactory


@pytest.fixture
def owner(db):
    """Client who owns ``project``."""
    return ClientFactory()


@pytest.fixture
def freelancer(db):
    return FreelancerFactory()


@pytest.fixture
def project(db, owner):
    return ProjectFactory(client=owner)


@pytest.fixture
def api_client(db):
    """Provide a DRF API test client."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def owner_api_client(db, owner):
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=owner)
    return client


@pytest.fixture
def freelancer_api_client(db, freelancer):
    from rest_framework.test import APIClient
    client = APIClient()
    client.force_authenticate(user=freelancer)
    return client
