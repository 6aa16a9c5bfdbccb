# freshbulk/api/__init__.py
from fastapi import FastAPI

from freshbulk.api.routers import health, products, orders, addresses, users


def create_app() -> FastAPI:
    app = FastAPI(
        title="FreshBulk Orders",
        version="1.0.0",
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(addresses.router)
    app.include_router(users.router)

    return app
