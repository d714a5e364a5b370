from .jwt_handler import create_access_token, create_seller_token, create_customer_token, verify_access_token
from .dependencies import get_current_seller_id, get_current_customer_id, get_optional_seller_id
from .rate_limiter import limiter, user_id_or_ip

__all__ = [
    "create_access_token",
    "create_seller_token",
    "create_customer_token",
    "verify_access_token",
    "get_current_seller_id",
    "get_current_customer_id",
    "get_optional_seller_id",
    "limiter",
    "user_id_or_ip"
]
