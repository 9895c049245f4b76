"""
storefront/schemas/admin.py
Admin login request and public admin profile.
"""
from typing import Literal

from pydantic import Field

from storefront.schemas.common import CamelModel, Envelope

Role = Literal["admin"]


class AdminLogin(CamelModel):
    username: str = Field("", description="Admin username")
    password: str = Field("", description="Plaintext password")


class AdminOut(CamelModel):
    username: str = Field(..., description="Admin username")
    role: Role = Field("admin", description="Always admin")


class AdminLoginResponse(Envelope):
    admin: AdminOut
