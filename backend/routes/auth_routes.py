# ---------- routes/auth_routes.py ----------
"""
Auth routes: credential signup/login, the current profile, logout and the
onboarding personality quiz.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.orm import Session

from auth import hash_password, verify_password, create_token, verify_token, get_current_user, get_token_payload
from database import get_db
from errors import UnlateError
from models.session import UserSession
from models.user import User
from services.personality_service import PersonalityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# ── Pydantic schemas ──────────────────────────────────────────────
class SignupRequest(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: str


class PersonalityTestRequest(BaseModel):
    personality: Optional[str] = None
    answers: Optional[dict] = None


# ── Routes ────────────────────────────────────────────────────────
@router.post("/signup", status_code=201)
async def signup(body: SignupRequest, db: Session = Depends(get_db)):
    """Create an account identified by email, username, or both."""
    if not body.password:
        raise HTTPException(status_code=400, detail="Password is required")

    email = (body.email or "").strip().lower() or None
    username = (body.username or "").strip() or None
    if not email and not username:
        raise HTTPException(status_code=400, detail="Either email or username is required")

    try:
        clauses = []
        if email:
            clauses.append(User.email == email)
        if username:
            clauses.append(User.username == username)
        if db.query(User).filter(or_(*clauses)).first():
            raise HTTPException(status_code=400, detail="User already exists with this email or username")

        user = User(
            email=email,
            username=username,
            hashed_password=hash_password(body.password),
            name=body.name or None,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("New user %s signed up", user.id)
        return {"message": "User created successfully", "user_id": user.id}
    except HTTPException:
        raise
    except Exception:
        db.rollback()
        logger.exception("Signup error")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/login")
async def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """Authenticate with username or email + password and open a session."""
    client_ip = request.client.host if request.client else "unknown"
    client_ua = request.headers.get("user-agent", "unknown")

    if body.email:
        user = db.query(User).filter_by(email=body.email.strip().lower()).first()
    elif body.username:
        user = db.query(User).filter_by(username=body.username.strip()).first()
    else:
        user = None

    if not user or not verify_password(body.password, user.hashed_password):
        logger.warning("Failed login from %s", client_ip)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    try:
        token = create_token({"user_id": user.id, "username": user.username})
        jti = verify_token(token)["jti"]
        db.add(UserSession(
            user_id=user.id,
            token_jti=jti,
            ip_address=client_ip,
            user_agent=client_ua,
            is_revoked=False,
        ))
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Session registration error")
        raise HTTPException(status_code=500, detail="Internal server error")

    return {
        "status": "success",
        "data": {"token": token, "user": user.to_dict()},
    }


@router.get("/me")
async def me(user_id: int = Depends(get_current_user), db: Session = Depends(get_db)):
    """Return the current user's profile."""
    user = db.query(User).filter_by(id=user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"status": "success", "data": user.to_dict()}


@router.post("/logout")
async def logout(payload: dict = Depends(get_token_payload), db: Session = Depends(get_db)):
    """Revoke the session behind the presented token."""
    try:
        session = db.query(UserSession).filter_by(token_jti=payload["jti"]).first()
        session.is_revoked = True
        db.commit()
        return {"status": "success", "data": {"message": "Logged out"}}
    except Exception:
        db.rollback()
        logger.exception("Logout error")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/personality-test")
async def personality_test(body: PersonalityTestRequest, user_id: int = Depends(get_current_user),
                           db: Session = Depends(get_db)):
    try:
        PersonalityService.save_result(db, user_id, body.personality, body.answers)
        return {"message": "Test result saved successfully"}
    except UnlateError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception:
        logger.exception("Error saving test result")
        raise HTTPException(status_code=500, detail="Internal server error")
