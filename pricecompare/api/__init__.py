# pricecompare/api/__init__.py
from fastapi import FastAPI
from pricecompare.api.routers import catalog, carts, orders, health


def create_app() -> FastAPI:
    app = FastAPI(
        title="Price Compare Service",
        version="1.0.0",
    )

    app.include_router(health.router)
    app.include_router(catalog.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app
