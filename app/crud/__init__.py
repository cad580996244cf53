# Import individual CRUD modules so they can be accessed via the package
from . import crud_user  # noqa
from . import crud_workspace  # noqa
from . import crud_post  # noqa
from .crud_booking import crud_booking  # noqa
from .crud_invoice import crud_invoice  # noqa
from .crud_request import quote_request, contact_request, visit_request  # noqa
from .crud_day_pass import day_pass  # noqa

__all__ = [
    "crud_user",
    "crud_workspace",
    "crud_post",
    "crud_booking",
    "crud_invoice",
    "quote_request",
    "contact_request",
    "visit_request",
    "day_pass",
]
