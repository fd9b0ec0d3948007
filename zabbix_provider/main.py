from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from zabbix_provider.api.endpoints import zabbix as zabbix_endpoints
from zabbix_provider.core.config import ZabbixSettings, get_app_settings
from zabbix_provider.core.limiter import limiter
from zabbix_provider.core.logger import logger, setup_logging
from zabbix_provider.dependencies import zabbix


def create_app(settings: Optional[ZabbixSettings] = None) -> FastAPI:
    app_settings = get_app_settings()
    setup_logging(app_settings.LOG_LEVEL)

    app = FastAPI()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(status_code=429, content={"message": "Too many requests"})

    @app.exception_handler(zabbix.ZabbixNotRegisteredError)
    async def not_registered_handler(request: Request, exc: zabbix.ZabbixNotRegisteredError):
        logger.error(str(exc))
        return JSONResponse(status_code=503, content={"message": str(exc)})

    @app.get("/")
    async def root():
        logger.info("Root path accessed.")
        return {"message": "Zabbix provider is running"}

    @app.on_event("startup")
    async def startup_event():
        await zabbix.init_zapi_client(app, settings)

    app.include_router(zabbix_endpoints.router, prefix="/api")
    return app


app = create_app()
