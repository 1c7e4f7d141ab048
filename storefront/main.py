# storefront/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from storefront.api import include_routers
from storefront.api.errors import register_error_handlers
from storefront.data.database import Base, engine
from storefront.utils.settings import CORS_ORIGINS
from storefront.utils.logging import get_logger

# register every model in Base.metadata before create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    #preflight on any path -> empty 200, registered last so it runs first
    @app.middleware("http")
    async def answer_preflight(request: Request, call_next):
        if request.method == "OPTIONS":
            headers = dict(CORS_HEADERS)
            origin = request.headers.get("origin")
            if "*" in CORS_ORIGINS:
                headers["Access-Control-Allow-Origin"] = "*"
            elif origin and origin in CORS_ORIGINS:
                headers["Access-Control-Allow-Origin"] = origin
            #origins outside the allow-list get no ACAO header
            return Response(status_code=200, headers=headers)
        return await call_next(request)

    register_error_handlers(app)
    include_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
