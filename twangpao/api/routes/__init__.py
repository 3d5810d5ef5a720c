from twangpao.api.routes.health import health_router
from twangpao.api.routes.redeem import redeem_router

__all__ = ["health_router", "redeem_router"]
