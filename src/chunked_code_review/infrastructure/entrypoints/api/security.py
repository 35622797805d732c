import secrets

from fastapi import HTTPException, Request, Security, status
from fastapi.security import APIKeyHeader

api_key_header = APIKeyHeader(name="X-API-KEY", auto_error=False)


async def validate_api_key(
    request: Request, api_key_header: str | None = Security(api_key_header)
) -> None:
    """Enforce ``X-API-KEY`` only when the service has an API key configured."""
    configured = request.app.state.settings.api_key
    if configured is None:
        return
    if not api_key_header or not secrets.compare_digest(
        api_key_header, configured.get_secret_value()
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Could not validate credentials"
        )
