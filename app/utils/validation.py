"""Field validation helpers shared by the public submission endpoints."""
import re
from typing import Any, Dict, Iterable, Optional

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MOBILE_RE = re.compile(r"^\+?[\d\s-]{10,}$")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<!^)(?=[A-Z])")

FIELD_LABELS = {
    "full_name": "Full name",
    "email": "Email",
    "contact_number": "Contact number",
    "duration": "Duration",
    "start_date": "Start date",
    "workspace_id": "Workspace id",
    "workspace_name": "Workspace name",
    "payment_method": "Payment method",
    "visit_date": "Visit date",
    "password": "Password",
    "name": "Name",
}


def validate_email(email: Optional[str]) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def validate_mobile(mobile: Optional[str]) -> bool:
    return bool(mobile) and MOBILE_RE.match(mobile) is not None


def validate_password(password: Optional[str]) -> bool:
    return isinstance(password, str) and len(password) >= 6


def field_label(field: str) -> str:
    field = _CAMEL_BOUNDARY_RE.sub("_", field).lower()
    if field in FIELD_LABELS:
        return FIELD_LABELS[field]
    words = field.replace("_", " ").strip()
    return words[:1].upper() + words[1:]


def check_required_fields(data: Dict[str, Any], fields: Iterable[str]) -> Optional[str]:
    """Returns "<Label> is required" for the first missing or blank field, else None."""
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and value.strip() == ""):
            return f"{field_label(field)} is required"
    return None
