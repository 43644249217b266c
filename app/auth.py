from datetime import datetime, timedelta
from jose import JWTError, jwt, ExpiredSignatureError
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from typing import Optional
from app.models.user import User
from app.database import get_db
from app.exceptions import AuthenticationError, InvalidTokenError, TokenExpiredError
from .constants import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_COOKIE, ACCESS_TOKEN_EXPIRE_MINUTES
import logging

# Initialize logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# OAuth2 scheme for token validation; the admin screens also accept the cookie
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


# Function to hash a password
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


# Function to verify a password
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# Function to create an access token with an expiration time
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    if "sub" not in to_encode:
        raise ValueError("Missing 'sub' claim (email or username) in token data.")

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


# Function to decode an access token
def decode_access_token(token: str) -> str:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.error("Token expired")
        raise TokenExpiredError()
    except JWTError as e:
        logger.error(f"JWT decoding failed: {str(e)}")
        raise InvalidTokenError()

    email: str = payload.get("sub")
    if email is None:
        logger.warning("Token is missing 'sub' claim")
        raise InvalidTokenError("Token does not contain 'sub' field.")
    return email


async def get_current_user(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Fetch the user behind the admin session.

    The token is read from the Authorization header first, then from the
    ``access_token`` cookie set at login.
    """
    token = bearer_token or request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        logger.warning("No access token on request")
        raise AuthenticationError("Could not validate credentials")

    email = decode_access_token(token)

    result = await db.execute(select(User).options(selectinload(User.role)).where(User.email == email))
    user = result.scalars().first()
    if user is None:
        logger.warning(f"User with email '{email}' not found.")
        raise AuthenticationError("Could not validate credentials")

    request.state.user = user
    return user
