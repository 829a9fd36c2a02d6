from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer


bearer_scheme = HTTPBearer(auto_error=False)

MISSING_TOKEN_DETAIL = "A GitHub token is required as Authorization Bearer"


def extract_bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str:
    """Return the GitHub token sent as a Bearer credential.

    Raises:
        HTTPException: If credentials are missing, use another scheme, or are blank.
    """

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=401, detail=MISSING_TOKEN_DETAIL)

    token = credentials.credentials.strip()
    if not token:
        raise HTTPException(status_code=401, detail=MISSING_TOKEN_DETAIL)

    return token
