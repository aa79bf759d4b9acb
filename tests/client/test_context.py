from __future__ import annotations

import pytest

from config import get_settings_module
from src.attendance_tracker.attendance_tracker.client.context import ClientContext, load_client_context
from src.attendance_tracker.attendance_tracker.users.model import UserProfile


@pytest.mark.parametrize(
    "env,module",
    [("production", "config.production"), ("TEST", "config.testing"), ("staging", "config.development")],
)
def test_settings_module_from_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)
    assert get_settings_module() == module


def test_client_context_from_testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    context = load_client_context()

    assert context.base_url == "http://testserver"
    assert context.timeout == 2.0
    assert not context.authenticated
    assert context.auth_headers() == {}


def test_sign_in_and_out_produce_new_contexts():
    anonymous = ClientContext(base_url="http://api.test")
    signed_in = anonymous.signed_in("abc", UserProfile("1", "Ana", "ana@example.com"))

    assert anonymous.token is None
    assert signed_in.auth_headers() == {"Authorization": "Bearer abc"}
    assert signed_in.signed_out() == anonymous
