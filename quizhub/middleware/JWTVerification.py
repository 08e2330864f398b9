import os

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> dict:
    return jwt.decode(
        token,
        os.getenv("JWT_SECRET"),
        algorithms=[os.getenv("JWT_ALGORITHM", "HS256")],
    )


def jwt_validator(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"data": None, "error": "Authorization token missing", "success": False},
        )
    try:
        payload = decode_token(credentials.credentials)
    except jwt.PyJWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"data": None, "error": f"Invalid token: {str(e)}", "success": False},
        )
    if not payload.get("id"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"data": None, "error": "Token has no user id", "success": False},
        )
    return payload


def admin_validator(jwt_payload: dict = Depends(jwt_validator)) -> dict:
    if jwt_payload.get("userType") != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"data": None, "error": "Admin access required", "success": False},
        )
    return jwt_payload


def display_name_from(jwt_payload: dict) -> str:
    """Display name from the token, falling back to the email local part."""
    if jwt_payload.get("displayName"):
        return jwt_payload["displayName"]
    email = jwt_payload.get("email") or ""
    return email.split("@")[0] or str(jwt_payload["id"])
