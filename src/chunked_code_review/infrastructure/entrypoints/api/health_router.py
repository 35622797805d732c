from importlib.metadata import PackageNotFoundError, version

from fastapi import APIRouter

router = APIRouter()

_SERVICE = "chunked-code-review"


@router.get("/health")
def health_check() -> dict[str, str]:
    try:
        app_version = version(_SERVICE)
    except PackageNotFoundError:
        app_version = "0.0.0"

    return {
        "status": "ok",
        "service": _SERVICE,
        "version": app_version,
    }
