"""Gravatar API router."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from gravatar_app.core.exceptions import ConfigurationError
from gravatar_app.models.gravatar import (
    AvatarBase64Response,
    AvatarUrlResponse,
    ImageRequest,
)
from gravatar_app.services.gravatar import GravatarService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gravatar", tags=["gravatar"])


def get_gravatar_service(request: Request) -> GravatarService:
    """FastAPI dependency: retrieve GravatarService from app.state.

    Returns HTTP 503 if the service was not initialized at startup.
    """
    svc: GravatarService | None = getattr(request.app.state, "gravatar", None)
    if svc is None:
        raise HTTPException(
            status_code=503,
            detail="Gravatar service unavailable. Service not initialized.",
        )
    return svc


@router.get("/url", response_model=AvatarUrlResponse)
def get_avatar_url(
    params: ImageRequest = Depends(),
    service: GravatarService = Depends(get_gravatar_service),
) -> AvatarUrlResponse:
    """Build the avatar URL for an email, applying the requested or default preset.

    Raises:
        HTTPException 400: Preset configuration error or unknown preset name.
        HTTPException 422: Preset value rejected by the URL builder.
    """
    image = service.image(params.email, params.preset)
    try:
        url = image.url()
    except ConfigurationError as exc:
        logger.error(
            "Gravatar preset could not be applied",
            exc_info=True,
            extra={"service": "GravatarRouter", "error_type": type(exc).__name__},
        )
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return AvatarUrlResponse(email=params.email, preset=image.applied_preset(), url=url)


@router.get("/base64", response_model=AvatarBase64Response)
def get_avatar_base64(
    params: ImageRequest = Depends(),
    timeout: Optional[float] = Query(default=None, gt=0, le=30),
    service: GravatarService = Depends(get_gravatar_service),
) -> AvatarBase64Response:
    """Download the avatar and return it inline as a PNG data URL.

    data_url is null when the avatar could not be fetched; failures are
    logged, not reported as errors.
    """
    image = service.image(params.email, params.preset)
    data_url = image.to_base64(timeout=timeout or service.timeout)
    return AvatarBase64Response(
        email=params.email, preset=image.applied_preset(), data_url=data_url
    )


@router.get("/presets", response_model=list[str])
def list_presets(service: GravatarService = Depends(get_gravatar_service)) -> list[str]:
    """Names of the configured presets."""
    return service.presets()
