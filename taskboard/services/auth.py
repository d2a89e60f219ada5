"""Account services: registration, login, profile and board updates."""
import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..errors import (
    ConflictError,
    IncorrectPasswordError,
    InvalidCredentialsError,
    NotFoundError,
    UnknownUserError,
    ValidationError,
)
from ..models import User
from ..schemas.user import LoginRequest, RegisterRequest, UserUpdate
from ..security import Identity, create_access_token, hash_password, verify_password
from ..timeutils import utcnow

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    return create_access_token(Identity(id=str(user.id), email=user.email))


def _get_user(db: Session, identity: Identity) -> User:
    user = db.get(User, identity.id)
    if user is None:
        raise NotFoundError("User does not exist")
    return user


def register_user(db: Session, payload: RegisterRequest) -> Tuple[User, str]:
    """Create an account and return it with a fresh session token."""
    if payload.password != payload.confirm_password:
        raise ValidationError("Passwords do not match.")

    if db.query(User).filter(User.email == payload.email).first():
        raise ConflictError("User already exists.")

    user = User(
        name=payload.name,
        email=payload.email,
        hashed_password=hash_password(payload.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise ConflictError("User already exists.")
    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return user, issue_token(user)


def authenticate_user(db: Session, payload: LoginRequest) -> Tuple[User, str]:
    user = db.query(User).filter(User.email == payload.email).first()
    if not user:
        logger.warning("Login attempt for unknown email")
        raise UnknownUserError()
    if not verify_password(payload.password, user.hashed_password):
        logger.warning("Login with wrong password for user %s", user.id)
        raise InvalidCredentialsError()

    logger.info("User %s logged in", user.id)
    return user, issue_token(user)


def get_user_detail(db: Session, identity: Identity) -> User:
    return _get_user(db, identity)


def update_user(db: Session, identity: Identity, payload: UserUpdate) -> User:
    """Apply a partial profile update.

    A password change needs both the old and the new password; the old one
    must match the stored hash.
    """
    name, email = payload.name, payload.email
    old_password, new_password = payload.old_password, payload.new_password

    if not (name or email or old_password or new_password):
        raise ValidationError("Please provide at least one field to update")
    if bool(old_password) != bool(new_password):
        raise ValidationError("Please provide both old password and new password")

    user = _get_user(db, identity)

    if old_password and not verify_password(old_password, user.hashed_password):
        raise IncorrectPasswordError()

    if new_password:
        user.hashed_password = hash_password(new_password)
    if name:
        user.name = name
    if email and email != user.email:
        taken = db.query(User).filter(User.email == email, User.id != user.id).first()
        if taken:
            raise ConflictError("Email is already in use")
        user.email = email

    user.updated_at = utcnow()
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email is already in use")
    db.refresh(user)

    logger.info("Updated profile of user %s", user.id)
    return user


def add_to_board(db: Session, identity: Identity, email: str) -> User:
    """Append ``email`` to the caller's board unless it is already there.

    This is a read-then-write: two concurrent adds of different emails by
    the same user can lose one of them.
    """
    user = _get_user(db, identity)

    if email in user.board:
        raise ConflictError("Email already added in your board")

    # JSON columns only notice reassignment, not in-place mutation.
    user.board = [*user.board, email]
    user.updated_at = utcnow()
    db.commit()
    db.refresh(user)

    logger.info("User %s added %s to board", user.id, email)
    return user
