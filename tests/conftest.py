import os
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from pyzabbix import ZabbixAPI

from zabbix_provider.core.config import ENV_PREFIX, get_app_settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from ZABBIX_* variables and any local .env file."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    get_app_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_settings.cache_clear()


@pytest.fixture
def zabbix_api(monkeypatch):
    """Use the real pyzabbix.ZabbixAPI with its network-bound methods mocked.

    ``cls`` wraps the class so constructions can be counted, ``login`` and
    ``api_version`` replace the methods that talk to the server.
    """
    login = MagicMock(name="ZabbixAPI.login")
    api_version = MagicMock(name="ZabbixAPI.api_version", return_value="6.4.0")
    monkeypatch.setattr(ZabbixAPI, "login", login)
    monkeypatch.setattr(ZabbixAPI, "api_version", api_version)

    cls = MagicMock(name="ZabbixAPI", wraps=ZabbixAPI)
    monkeypatch.setattr("zabbix_provider.dependencies.zabbix.ZabbixAPI", cls)
    return SimpleNamespace(cls=cls, login=login, api_version=api_version)
