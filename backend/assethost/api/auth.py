import logging
import secrets

from fastapi import HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from werkzeug.security import check_password_hash

from assethost.config import Config

security = HTTPBasic()

def verify_admin_credentials(credentials: HTTPBasicCredentials, config: Config) -> str:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid username or password",
        headers={"WWW-Authenticate": "Basic"},
    )
    if not config.ADMIN_PASSWORD_HASH:
        logging.error("ADMIN_PASSWORD_HASH is not configured, rejecting admin request")
        raise credentials_exception

    username_ok = secrets.compare_digest(credentials.username.encode("utf-8"), config.ADMIN_USERNAME.encode("utf-8"))
    password_ok = check_password_hash(config.ADMIN_PASSWORD_HASH, credentials.password)
    if not (username_ok and password_ok):
        logging.warning(f"Rejected admin login for user '{credentials.username}'")
        raise credentials_exception
    return credentials.username
