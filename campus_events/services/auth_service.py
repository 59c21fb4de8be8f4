"""
Admin account operations: registration, login, tokens, profile and
super-admin management.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from campus_events.core.exceptions import AuthenticationError, CampusEventsError, ConflictError
from campus_events.core.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    decode_token,
    generate_reset_token,
    get_password_hash,
    verify_password,
)
from campus_events.models import Admin
from campus_events.repositories import AdminRepo
from campus_events.services.notification_service import NotificationService, notification_service

logger = logging.getLogger(__name__)

FORGOT_PASSWORD_MESSAGE = "If an account with that email exists, a password reset link has been sent"


def token_claims(admin: Admin) -> Dict[str, Any]:
    return {"id": admin.id, "username": admin.username, "email": admin.email, "role": admin.role}


def issue_tokens(admin: Admin) -> Dict[str, str]:
    claims = token_claims(admin)
    return {
        "access_token": create_access_token(claims),
        "refresh_token": create_refresh_token({"id": admin.id}),
        "token_type": "bearer",
    }


class AuthService:
    def __init__(self, notifier: NotificationService = notification_service):
        self.notifier = notifier

    def _check_unique(self, db: Session, username: str = None, email: str = None, exclude_id: str = None):
        if username:
            existing = AdminRepo.find_by_username(db, username)
            if existing and existing.id != exclude_id:
                raise ConflictError("Username already exists")
        if email:
            existing = AdminRepo.find_by_email(db, email)
            if existing and existing.id != exclude_id:
                raise ConflictError("Email already exists")

    def register(self, db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
        self._check_unique(db, data["username"], data["email"])

        admin = Admin.create({
            "username": data["username"],
            "email": data["email"],
            "password_hash": get_password_hash(data["password"]),
            "role": data.get("role"),
        })
        admin = AdminRepo.create(db, admin)
        logger.info("Registered admin %s (%s)", admin.username, admin.role)

        return {"admin": admin.to_dict(), **issue_tokens(admin)}

    def login(self, db: Session, identifier: str, password: str) -> Dict[str, Any]:
        admin = AdminRepo.find_by_identifier(db, identifier)

        if admin is None or not admin.is_active or not verify_password(password, admin.password_hash):
            logger.warning("Failed login for %s", identifier)
            raise AuthenticationError("Invalid credentials")

        admin.mark_logged_in()
        admin = AdminRepo.update(db, admin.id, {"last_login": admin.last_login})
        return {"admin": admin.to_dict(), **issue_tokens(admin)}

    def refresh(self, db: Session, refresh_token: str) -> Dict[str, Any]:
        payload = decode_token(refresh_token, REFRESH_TOKEN)
        admin = AdminRepo.find_by_id(db, payload.get("id"))
        if admin is None or not admin.is_active:
            raise AuthenticationError("Invalid credentials")
        return {"access_token": create_access_token(token_claims(admin)), "token_type": "bearer"}

    def get_active_admin(self, db: Session, admin_id: str) -> Admin:
        admin = AdminRepo.find_by_id(db, admin_id)
        if admin is None or not admin.is_active:
            raise AuthenticationError("Invalid session")
        return admin

    def update_profile(self, db: Session, admin_id: str, changes: Dict[str, Any]) -> Admin:
        admin = self.get_active_admin(db, admin_id)
        self._check_unique(db, changes.get("username"), changes.get("email"), exclude_id=admin.id)
        return AdminRepo.update(db, admin.id, changes)

    def change_password(self, db: Session, admin_id: str, current_password: str, new_password: str) -> None:
        admin = self.get_active_admin(db, admin_id)
        if not verify_password(current_password, admin.password_hash):
            raise CampusEventsError("Current password is incorrect", status_code=400)
        AdminRepo.update(db, admin.id, {"password_hash": get_password_hash(new_password)})
        logger.info("Password changed for admin %s", admin.username)

    def forgot_password(self, db: Session, email: str) -> str:
        admin = AdminRepo.find_by_email(db, email)
        if admin is not None and admin.is_active:
            self.notifier.send_password_reset(admin.email, generate_reset_token())
        return FORGOT_PASSWORD_MESSAGE

    def list_admins(self, db: Session) -> List[Admin]:
        return AdminRepo.list(db)

    def set_active(self, db: Session, actor_id: str, admin_id: str, active: bool) -> Admin:
        if not active and actor_id == admin_id:
            raise CampusEventsError("Cannot deactivate your own account", status_code=400)
        AdminRepo.get_by_id(db, admin_id)
        admin = AdminRepo.update(db, admin_id, {"is_active": active})
        logger.info("Admin %s %s by %s", admin.username, "activated" if active else "deactivated", actor_id)
        return admin


auth_service = AuthService()
