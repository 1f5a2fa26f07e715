# staynest/app.py
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .config import settings
from .db import engine, init_db
from .utils.uploads import PUBLIC_PREFIX, upload_dir

from .routers import auth as auth_router
from .routers import users as users_router
from .routers import residents as residents_router
from .routers import laundry as laundry_router
from .routers import bills as bills_router
from .routers import complaints as complaints_router
from .routers import maintenance as maintenance_router
from .routers import lost_found as lost_found_router
from .routers import menus as menus_router
from .routers import polls as polls_router
from .routers import packages as packages_router
from .routers import dashboard as dashboard_router


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def create_app() -> FastAPI:
    _setup_logging()
    app = FastAPI(title="StayNest API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    init_db()

    # --- Routers ---
    app.include_router(auth_router.router)
    app.include_router(users_router.router)
    app.include_router(residents_router.router)
    app.include_router(dashboard_router.router)

    # Guest services
    app.include_router(laundry_router.router)
    app.include_router(packages_router.router)
    app.include_router(menus_router.router)
    app.include_router(polls_router.router)

    # Requests & records managed by the head
    app.include_router(bills_router.router)
    app.include_router(complaints_router.router)
    app.include_router(maintenance_router.router)
    app.include_router(lost_found_router.router)

    # Uploaded photos (lost & found items, profile pictures)
    app.mount(PUBLIC_PREFIX, StaticFiles(directory=upload_dir()), name="uploads")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logging.getLogger(__name__).info("StayNest API ready (db=%s)", engine.url.render_as_string(hide_password=True))
    return app


app = create_app()
