"""
# `storefront/routers/auth.py`: Admin login

### `POST /api/admin/login`
Body: `{username, password}`.
Success → `{success: true, message, admin: {username, role}}`; otherwise `401`
`{success: false, message: "Invalid credentials"}`.
"""
from fastapi import APIRouter, Depends

from storefront.core.security import authenticate_admin, get_store
from storefront.repositories.base import StorefrontStore
from storefront.schemas.admin import AdminLogin, AdminLoginResponse, AdminOut

router = APIRouter(prefix="/api/admin", tags=["Auth"])


@router.post("/login", response_model=AdminLoginResponse)
def admin_login(body: AdminLogin, store: StorefrontStore = Depends(get_store)):
    admin = authenticate_admin(store, body.username, body.password)
    return AdminLoginResponse(
        message=f"Login successful{store.message_suffix}",
        admin=AdminOut.model_validate(admin),
    )
