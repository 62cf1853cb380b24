# marketplace/main.py
from fastapi import FastAPI
import uvicorn

from marketplace.api.errors import register_error_handlers
from marketplace.api.routers import carts, comments, health, listings, orders, users, wishlist
from marketplace.data.database import Base, init_db
from marketplace.data.seed import seed_admin
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Marketplace",
        version="1.0.0",
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(listings.router)
    app.include_router(comments.router)
    app.include_router(wishlist.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app


logger.info("Initializing database")
try:
    init_db()
    logger.info(f"Tables ready: {sorted(Base.metadata.tables)}")
except Exception as e:
    logger.error(f"Failed to create tables: {e}")
    raise

seed_admin()

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
