from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, COOKIE_SECURE, TOKEN_COOKIE_NAME
from ..database import get_db
from ..models import User
from ..schemas.user import (
    BoardEntry,
    LoginRequest,
    RegisterRequest,
    User as UserSchema,
    UserDetail,
    UserUpdate,
)
from ..security import Identity, get_current_identity
from ..services import analytics as analytics_service
from ..services import auth as auth_service

router = APIRouter()


def _set_token_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def _auth_payload(user: User, token: str, message: str) -> dict:
    return {
        "success": True,
        "message": message,
        "data": UserSchema.model_validate(user),
        "token": token,
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """Create a new user account and start a session."""
    user, token = auth_service.register_user(db, payload)
    _set_token_cookie(response, token)
    return _auth_payload(user, token, "User registered successfully.")


@router.post("/login")
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """Sign in and get a JWT token."""
    user, token = auth_service.authenticate_user(db, payload)
    _set_token_cookie(response, token)
    return _auth_payload(user, token, "User logged in successfully")


@router.post("/logout")
def logout(response: Response):
    """Sign out and clear the session cookie."""
    response.delete_cookie(key=TOKEN_COOKIE_NAME, httponly=True, secure=COOKIE_SECURE, samesite="lax")
    return {"success": True, "message": "User logged out successfully"}


@router.put("/update")
def update_user(
    payload: UserUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user = auth_service.update_user(db, identity, payload)
    return {
        "success": True,
        "message": "User details updated successfully",
        "data": UserSchema.model_validate(user),
    }


@router.get("/analytics")
def user_analytics(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    return {"status": "success", "data": analytics_service.get_analytics(db, identity)}


@router.get("/userDetail")
def user_detail(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user = auth_service.get_user_detail(db, identity)
    return {"success": True, "data": UserDetail.model_validate(user)}


@router.post("/addToBoard")
def add_to_board(
    payload: BoardEntry,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    auth_service.add_to_board(db, identity, payload.email)
    return {"success": True, "message": "Email added to user board successfully"}
