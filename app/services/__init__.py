from . import pricing_service
from . import invoice_service
from . import booking_service
from . import auth_service
from . import user_service
from . import workspace_service
from . import request_service
from . import day_pass_service
from . import post_service

__all__ = [
    "pricing_service",
    "invoice_service",
    "booking_service",
    "auth_service",
    "user_service",
    "workspace_service",
    "request_service",
    "day_pass_service",
    "post_service",
]
