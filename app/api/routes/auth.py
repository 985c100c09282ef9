"""
Registration, login and self-profile endpoints.
"""
import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth_dependency import Identity, get_current_identity, get_settings
from app.core.config import Settings
from app.core.logging_config import sanitize_log_data
from app.core.security import hash_password, verify_password, create_access_token
from app.db.models.user import User
from app.db.session import get_db
from app.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    LoginUser,
    ProfileResponse,
    ProfileUpdate,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a job seeker or employer.

    Fails with 400 when the email is already taken.
    """
    logger.info(f"Registration attempt: {sanitize_log_data(payload.model_dump(mode='json'))}")

    existing_user = db.query(User).filter(User.email == payload.email).first()
    if existing_user:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    try:
        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=payload.role.value,
            skills=payload.skills,
            resume=payload.resume,
            company_name=payload.company_name,
            company_description=payload.company_description,
        )
        db.add(user)
        db.commit()
        db.refresh(user)

    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to register user: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info(f"User registered: user_id={user.id}, role={user.role}")

    return RegisterResponse(message="User registered successfully", user_id=user.id)


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    # Same message for unknown email and wrong password
    user = db.query(User).filter(User.email == payload.email).first()

    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Login failed: invalid credentials")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(
        {"id": user.id, "role": user.role},
        settings.secret_key,
        settings.algorithm,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )

    logger.info(f"Login successful: user_id={user.id}, role={user.role}")

    return LoginResponse(token=token, user=LoginUser.model_validate(user))


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.id == identity.id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return ProfileResponse.model_validate(user)


@router.put("/profile", response_model=MessageResponse)
def update_profile(
    payload: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    """
    Update the caller's own profile.

    Only fields present in the request body are written; the rest keep their values.
    """
    try:
        user = db.query(User).filter(User.id == identity.id).first()
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        update_data = payload.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(user, field, value)

        db.commit()

        logger.info(f"Profile updated: user_id={user.id}, fields={sorted(update_data)}")

        return MessageResponse(message="Profile updated successfully")

    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update profile: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
