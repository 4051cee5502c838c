"""Tests for requester resolution."""

from unittest.mock import patch

import pytest
from django.contrib.auth.models import AnonymousUser
from django.core.cache import cache
from django.test import RequestFactory

from server.apps.files.infrastructure.identity import (
    resolve_requester,
    token_cache_key,
)


@pytest.fixture
def request_factory():
    """Django request factory."""
    return RequestFactory()


@pytest.fixture(autouse=True)
def _clear_cache():
    cache.clear()
    yield
    cache.clear()


def test_token_cache_key():
    """Test cache key layout shared with the token issuer."""
    assert token_cache_key('abc') == 'auth_abc'


@pytest.mark.django_db
def test_resolve_token(request_factory, user):
    """Test a known token resolves to its user."""
    cache.set(token_cache_key('secret'), user.id)
    request = request_factory.get('/files', HTTP_X_TOKEN='secret')

    assert resolve_requester(request) == user.id


@pytest.mark.django_db
def test_resolve_token_stored_as_string(request_factory, user):
    """Test user ids stored as strings are accepted."""
    cache.set(token_cache_key('secret'), str(user.id))
    request = request_factory.get('/files', HTTP_X_TOKEN='secret')

    assert resolve_requester(request) == user.id


@pytest.mark.django_db
def test_resolve_unknown_token(request_factory):
    """Test unknown tokens are anonymous."""
    request = request_factory.get('/files', HTTP_X_TOKEN='nope')

    assert resolve_requester(request) is None


@pytest.mark.django_db
def test_resolve_token_of_inactive_user(request_factory, user):
    """Test tokens of deactivated users are rejected."""
    user.is_active = False
    user.save()
    cache.set(token_cache_key('secret'), user.id)
    request = request_factory.get('/files', HTTP_X_TOKEN='secret')

    assert resolve_requester(request) is None


@pytest.mark.django_db
def test_resolve_token_with_malformed_user_id(request_factory):
    """Test garbage in the cache is anonymous."""
    cache.set(token_cache_key('secret'), 'not-an-id')
    request = request_factory.get('/files', HTTP_X_TOKEN='secret')

    assert resolve_requester(request) is None


def test_resolve_token_cache_failure(request_factory):
    """Test a failing cache never breaks the request."""
    request = request_factory.get('/files', HTTP_X_TOKEN='secret')

    with patch(
        'server.apps.files.infrastructure.identity.cache.get',
        side_effect=ConnectionError('cache down'),
    ):
        assert resolve_requester(request) is None


@pytest.mark.django_db
def test_resolve_ignores_session_user(request_factory, user):
    """Test a logged-in session alone does not identify the requester."""
    request = request_factory.get('/files')
    request.user = user

    assert resolve_requester(request) is None


def test_resolve_anonymous(request_factory):
    """Test requests without credentials are anonymous."""
    request = request_factory.get('/files')
    request.user = AnonymousUser()

    assert resolve_requester(request) is None
    assert resolve_requester(request_factory.get('/files')) is None
