"""
Pydantic schema for the one-time-code login exchange.
"""

from typing import Optional, Union
from pydantic import BaseModel, EmailStr


class PasswordlessChallenge(BaseModel):
    email: Optional[EmailStr] = None
    # Servers pick the code length; kept exactly as returned
    code_length: Optional[Union[int, str]] = None
    error: bool = False

    model_config = {"frozen": True}
