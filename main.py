import os

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shared.config.database import create_tables
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.identity_service import models as identity_models  # noqa: F401
from services.store_service import models as store_models  # noqa: F401
from services.product_service import models as product_models  # noqa: F401
from services.order_service import models as order_models  # noqa: F401

from services.identity_service.router import auth_router, seller_router, public_router as identity_public
from services.store_service.router import router as store_router, public_router as store_public
from services.product_service.router import router as product_router, public_router as product_public
from services.order_service.router import router as order_router, public_router as order_public

SERVICE_NAME = os.getenv("SERVICE_NAME", "bazaar_api")
API_PREFIX = "/api"

app = FastAPI(title="Bazaar Commerce API", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, SERVICE_NAME)

# --- SECURITY SETUP ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

register_exception_handlers(app)

# Health routes first so /stores/health is not captured by /stores/{store_id}
for public in (identity_public, store_public, product_public, order_public):
    app.include_router(public, prefix=API_PREFIX)

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(seller_router, prefix=API_PREFIX)
app.include_router(store_router, prefix=API_PREFIX)
app.include_router(product_router, prefix=API_PREFIX)
app.include_router(order_router, prefix=API_PREFIX)


@app.on_event("startup")
async def startup_event():
    await create_tables()


@app.get(f"{API_PREFIX}/health")
async def health_check():
    return {
        "success": True,
        "message": "Server is running",
        "endpoints": {
            "users": f"{API_PREFIX}/auth",
            "sellers": f"{API_PREFIX}/seller",
            "stores": f"{API_PREFIX}/stores",
            "products": f"{API_PREFIX}/products",
            "orders": f"{API_PREFIX}/orders",
        },
    }
