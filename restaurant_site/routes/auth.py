from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from .. import schemas
from ..auth_service import AuthService
from ..database import get_db
from ..dependencies import SESSION_USER_KEY, current_user
from ..models import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=schemas.User, status_code=201)
def register(request: Request, payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """Register a new account and log it in"""
    user = AuthService(db).register(payload)
    request.session[SESSION_USER_KEY] = user.id
    return user


@router.post("/login", response_model=schemas.User)
def login(request: Request, payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    user = AuthService(db).login(payload)
    request.session[SESSION_USER_KEY] = user.id
    return user


@router.api_route("/logout", methods=["GET", "POST"], response_model=schemas.MessageResponse)
def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out successfully"}


@router.get("/user", response_model=schemas.User)
def get_current_user(user: User = Depends(current_user)):
    return user
