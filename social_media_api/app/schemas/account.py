"""
Pydantic models for account data.

The same ``AccountCreate`` shape is used for registration and for
login credentials.  Both fields are optional at the schema level so a
body with a missing field still reaches the service, which decides
whether it is a validation failure (register) or simply invalid
credentials (login).
"""

from typing import Optional

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Schema for registering an account or submitting login credentials."""

    username: Optional[str] = Field(None, examples=["bob"])
    password: Optional[str] = Field(None, examples=["pw1"])


class AccountRead(BaseModel):
    """Schema for reading an account from the API.

    There is no password hashing in this API, so the stored password is
    echoed back exactly as it was registered.
    """

    account_id: int
    username: str
    password: str

    model_config = {
        "from_attributes": True,
    }
