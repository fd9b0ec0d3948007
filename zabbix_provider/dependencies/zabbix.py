# zabbix_provider/dependencies/zabbix.py
import asyncio
import logging
from typing import Optional

import requests
from fastapi import FastAPI, Request
from pyzabbix import ZabbixAPI

from zabbix_provider.core.config import ZabbixSettings, get_settings

logger = logging.getLogger(__name__)

STATE_KEY = "zabbix"


class ZabbixNotRegisteredError(RuntimeError):
    pass


def build_session(settings: ZabbixSettings) -> requests.Session:
    session = requests.Session()
    if settings.http_username:
        session.auth = (settings.http_username, settings.http_password or "")
    if not settings.check_ssl:
        session.verify = False
    elif settings.ssl_context:
        session.verify = settings.ssl_context
    return session


def build_client(settings: ZabbixSettings) -> ZabbixAPI:
    """Construct and authenticate a ZabbixAPI client.

    Connection and authentication errors raised by pyzabbix or requests are
    left to the caller.
    """
    zapi = ZabbixAPI(settings.url, session=build_session(settings))
    if settings.uses_token:
        logger.info(f"Authenticating to {settings.url} with API token")
        zapi.login(api_token=settings.auth_token)
    else:
        logger.info(f"Authenticating to {settings.url} as {settings.username}")
        zapi.login(settings.username, settings.password)
    return zapi


class ZabbixProvider:
    """Owns the single ZabbixAPI client of an application."""

    def __init__(self) -> None:
        self._zapi: Optional[ZabbixAPI] = None
        self.settings: Optional[ZabbixSettings] = None

    @property
    def is_registered(self) -> bool:
        return self._zapi is not None

    def register(self, settings: ZabbixSettings) -> ZabbixAPI:
        if self._zapi is not None:
            return self._zapi
        self._zapi = build_client(settings)
        self.settings = settings
        return self._zapi

    def resolve(self) -> ZabbixAPI:
        if self._zapi is None:
            raise ZabbixNotRegisteredError("ZabbixAPI client not initialized, call init_zapi_client first.")
        return self._zapi


async def init_zapi_client(app: FastAPI, settings: Optional[ZabbixSettings] = None) -> ZabbixProvider:
    provider = ZabbixProvider()
    settings = settings or get_settings()
    try:
        await asyncio.to_thread(provider.register, settings)
    except Exception as e:
        logger.error(f"Failed to initialize Zabbix client for {settings.url}: {e}")
        raise
    setattr(app.state, STATE_KEY, provider)
    return provider


def get_provider(app: FastAPI) -> ZabbixProvider:
    provider = getattr(app.state, STATE_KEY, None)
    if provider is None:
        raise ZabbixNotRegisteredError("ZabbixAPI client not initialized, call init_zapi_client first.")
    return provider


def get_zapi(request: Request) -> ZabbixAPI:
    return get_provider(request.app).resolve()
