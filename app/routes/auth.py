from fastapi import APIRouter, Depends, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from datetime import timedelta
from ..constants import ACCESS_TOKEN_COOKIE, ACCESS_TOKEN_EXPIRE_MINUTES
from ..auth import create_access_token, verify_password
from ..exceptions import InvalidCredentialsError
from ..models import User
from ..database import get_db
from ..schemas.token import Token
import logging

# Initialize logger
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/token", response_model=Token)
async def login_for_access_token(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """
    Issue an access token and start an admin session.

    The token is returned in the body for API clients and set as the
    ``access_token`` cookie for the admin screens.
    """
    result = await db.execute(select(User).where(User.email == form_data.username))
    user = result.scalars().first()

    if not user or not verify_password(form_data.password, user.hashed_password):
        logger.warning(f"Login failed for email: {form_data.username}")
        raise InvalidCredentialsError()

    access_token = create_access_token(
        data={"sub": user.email},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=access_token,
        httponly=True,
        samesite="lax",
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    logger.info(f"Access token created for user: {user.email}")

    return {"access_token": access_token, "token_type": "Bearer"}
