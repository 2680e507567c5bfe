from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt
from typing import Any, Dict

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60

# Hash a password
def hash_password(password: str) -> str:
    return pwd_context.hash(password)

# Verify a plain password against a hash
def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # stored value is not a hash passlib recognises
        return False

def looks_hashed(value: str) -> bool:
    return pwd_context.identify(value) is not None if value else False

# Create JWT access token
def create_access_token(data: dict, secret_key: str, algorithm: str = ALGORITHM,
                        expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, secret_key, algorithm=algorithm)
    return encoded_jwt

# Decode and validate a JWT; raises jose.JWTError when invalid or expired
def decode_access_token(token: str, secret_key: str, algorithm: str = ALGORITHM) -> Dict[str, Any]:
    return jwt.decode(token, secret_key, algorithms=[algorithm])
