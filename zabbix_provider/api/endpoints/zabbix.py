# zabbix_provider/api/endpoints/zabbix.py
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel
from pyzabbix import ZabbixAPI

from zabbix_provider.core.config import get_app_settings
from zabbix_provider.core.limiter import limiter
from zabbix_provider.dependencies.zabbix import get_zapi

logger = logging.getLogger(__name__)

router = APIRouter()


class ZabbixStatus(BaseModel):
    url: str
    version: str


@router.get("/zabbix/status", response_model=ZabbixStatus)
@limiter.limit(lambda: get_app_settings().STATUS_RATE_LIMIT)
async def get_status(request: Request, zapi: ZabbixAPI = Depends(get_zapi)):
    try:
        version = await asyncio.to_thread(zapi.api_version)
    except Exception as e:
        logger.error(f"Zabbix API version check failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return {"url": zapi.url, "version": str(version)}
