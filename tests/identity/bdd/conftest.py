"""Shared BDD fixtures and step definitions for the Identity context."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.identity.registration import RegisterUser
from storefront.identity.user import User
from storefront.notifications.channel import get_email_channel


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a registered user "{email}" with password "{password}"'), target_fixture="user")
def registered_user(email, password):
    user_id = current_domain.process(
        RegisterUser(email=email, password=password, first_name="Bea"),
        asynchronous=False,
    )
    return current_domain.repository_for(User).get(user_id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request fails with "{message}"'))
def request_fails(error, message):
    assert error["exc"] is not None
    assert message in str(error["exc"].messages)


@then(parsers.cfparse('an email with subject containing "{text}" is sent to "{email}"'))
def email_sent(text, email):
    assert any(m["to"] == email and text in m["subject"] for m in get_email_channel().sent_emails)
