"""Product service API package."""

from products.api.routes import router

__all__ = ["router"]
