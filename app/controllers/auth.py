# controllers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..dependencies import get_db
from ..schemas import auth as schemas
from ..services import auth as service

router = APIRouter()


@router.post("/signup", response_model=schemas.User, status_code=status.HTTP_201_CREATED, summary="Register a new user")
def sign_up(data: schemas.SignUpRequest, db: Session = Depends(get_db)):
    return service.sign_up(db, data)


@router.post("/signin", response_model=schemas.TokenResponse, summary="Exchange credentials for a bearer token")
def sign_in(data: schemas.SignInRequest, db: Session = Depends(get_db)):
    return schemas.TokenResponse(access_token=service.sign_in(db, data))
