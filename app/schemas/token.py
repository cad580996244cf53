from pydantic import BaseModel
from typing import Optional


class TokenPayload(BaseModel):
    sub: Optional[str] = None  # 'sub' is the standard JWT field for subject (the user's email here)
    user_id: Optional[int] = None
    role: Optional[str] = None
