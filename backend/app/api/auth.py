"""Registration and login routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database import get_db
from app.services.users import user_service
from app.api.schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
async def register(req: RegisterRequest, db: AsyncSession = Depends(get_db)):
    user = await user_service.register(db, req.email, req.password, req.full_name)
    if user is None:
        raise HTTPException(status_code=400, detail="User already exists")
    return AuthResponse(
        user=UserResponse(id=user.id, email=user.email, full_name=user.full_name)
    )


@router.post("/login", response_model=AuthResponse)
async def login(req: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await user_service.authenticate(db, req.email, req.password)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return AuthResponse(
        user=UserResponse(id=user.id, email=user.email, full_name=user.full_name)
    )
