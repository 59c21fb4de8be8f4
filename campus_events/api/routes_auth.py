"""
Authentication routes: public sign-up/sign-in, profile and admin management
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from campus_events.api.deps import auth_limiter, get_current_user, require_permission
from campus_events.core.db import get_db
from campus_events.core.permissions import MANAGE, READ
from campus_events.services.auth_service import auth_service
from campus_events.services.validation import require_valid
from campus_events.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================
# Public
# ============================================

@router.post("/register", status_code=201, dependencies=[Depends(auth_limiter)])
async def register(payload: Any = Body(None), db: Session = Depends(get_db)):
    """Create an admin account and sign it in"""
    data = require_valid("auth.register", payload)
    return success_response("Admin registered successfully", auth_service.register(db, data))


@router.post("/login", dependencies=[Depends(auth_limiter)])
async def login(payload: Any = Body(None), db: Session = Depends(get_db)):
    """Sign in with email or username"""
    data = require_valid("auth.login", payload)
    return success_response("Login successful", auth_service.login(db, data["identifier"], data["password"]))


@router.post("/refresh")
async def refresh(payload: Any = Body(None), db: Session = Depends(get_db)):
    """Exchange a refresh token for a new access token"""
    data = require_valid("auth.refresh", payload)
    return success_response("Token refreshed successfully", auth_service.refresh(db, data["refresh_token"]))


@router.post("/forgot-password", dependencies=[Depends(auth_limiter)])
async def forgot_password(payload: Any = Body(None), db: Session = Depends(get_db)):
    data = require_valid("auth.forgot_password", payload)
    return success_response(auth_service.forgot_password(db, data["email"]))


# ============================================
# Authenticated
# ============================================

@router.get("/profile")
async def get_profile(db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    admin = auth_service.get_active_admin(db, user["id"])
    return success_response("Profile retrieved successfully", admin.to_dict())


@router.put("/profile")
async def update_profile(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    """Change username and/or email"""
    changes = require_valid("auth.profile_update", payload)
    admin = auth_service.update_profile(db, user["id"], changes)
    return success_response("Profile updated successfully", admin.to_dict())


@router.post("/change-password")
async def change_password(
    payload: Any = Body(None),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user)
):
    data = require_valid("auth.change_password", payload)
    auth_service.change_password(db, user["id"], data["current_password"], data["new_password"])
    return success_response("Password changed successfully")


@router.get("/validate")
async def validate_session(db: Session = Depends(get_db), user: dict = Depends(get_current_user)):
    """Confirm the token still belongs to an active admin"""
    admin = auth_service.get_active_admin(db, user["id"])
    return success_response("Session is valid", {"admin": admin.to_dict()})


@router.post("/logout")
async def logout(user: dict = Depends(get_current_user)):
    # tokens are stateless; the client discards them
    logger.info("Admin %s logged out", user.get("username"))
    return success_response("Logout successful")


# ============================================
# Super admin
# ============================================

@router.get("/admins")
async def list_admins(db: Session = Depends(get_db), user: dict = Depends(require_permission("admins", READ))):
    admins = auth_service.list_admins(db)
    return success_response("Admins retrieved successfully", [a.to_dict() for a in admins])


@router.post("/admins/{admin_id}/activate")
async def activate_admin(
    admin_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("admins", MANAGE))
):
    admin = auth_service.set_active(db, user["id"], admin_id, True)
    return success_response("Admin activated successfully", admin.to_dict())


@router.post("/admins/{admin_id}/deactivate")
async def deactivate_admin(
    admin_id: str,
    db: Session = Depends(get_db),
    user: dict = Depends(require_permission("admins", MANAGE))
):
    admin = auth_service.set_active(db, user["id"], admin_id, False)
    return success_response("Admin deactivated successfully", admin.to_dict())
