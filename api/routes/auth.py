"""
Login Endpoint

A one-shot credential check. No session, token or cookie is issued.
Every outcome is a 200 response; the `success` flag and `message`
tell them apart.
"""

import logging

from fastapi import APIRouter, Depends, Form
from sqlalchemy.orm import Session

from api.database import get_db, DatabaseManager
from api.models import LoginResponse
from core.security import verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    summary="Check user credentials",
    description="""
    Verify an email/password pair sent as form data
    (`application/x-www-form-urlencoded` or `multipart/form-data`).

    **Outcomes:**
    - `Login successful` with `user_id`
    - `Incorrect password`
    - `User not found`
    - `Missing email or password`
    """
)
async def login(
    email: str = Form(default=""),
    password: str = Form(default=""),
    db: Session = Depends(get_db)
):
    """Check a user's credentials."""
    if not email or not password:
        return LoginResponse(success=False, message="Missing email or password")

    with DatabaseManager(db) as db_manager:
        user = db_manager.get_user_by_email(email)

    if user is None:
        logger.info("Login failed: unknown email")
        return LoginResponse(success=False, message="User not found")

    if not verify_password(password, user["password"]):
        logger.info(f"Login failed: incorrect password for user {user['id']}")
        return LoginResponse(success=False, message="Incorrect password")

    logger.info(f"Login succeeded for user {user['id']}")
    return LoginResponse(success=True, message="Login successful", user_id=user["id"])
