"""
Storefront Catalog Application

Product catalog, session carts and product reviews served over a JSON API.
All state lives in an in-memory CatalogStore built when the app is created.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .core.config import Settings, get_settings
from .database import CatalogStore, demo_seed
from .routes import cart_router, categories_router, products_router, reviews_router

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront starting up...")
    logger.info(f"Catalog loaded with {len(app.state.store.products)} products")
    yield
    logger.info("Storefront shutting down...")


def create_app(
    store: Optional[CatalogStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the FastAPI application around a store.

    Without an explicit store, a new one is created and seeded with the
    demonstration catalog when ``settings.seed_demo_data`` is set.
    """
    settings = settings or get_settings()
    if store is None:
        store = CatalogStore(seed=demo_seed() if settings.seed_demo_data else None)

    app = FastAPI(
        title=settings.app_name,
        description="In-memory storefront catalog, cart and reviews API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include API routers
    app.include_router(products_router)
    app.include_router(reviews_router)
    app.include_router(categories_router)
    app.include_router(cart_router)

    @app.get("/")
    async def home():
        """API index"""
        return {
            "message": f"{settings.app_name} API",
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "categories": "/api/categories",
                "cart": "/api/cart",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "storefront"}

    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
