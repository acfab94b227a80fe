"""POST /split: split a text with a configured profile. GET /split/profiles: list profiles."""

from fastapi import APIRouter, HTTPException

from app.config.chunking.static import (
    get_active_profile_name,
    load_chunking_profiles,
    resolve_chunking_config,
)
from app.config.logging import get_logger
from app.config.settings import get_settings
from app.controllers.schema.split import ProfilesResponse, SplitRequest, SplitResponse
from app.services.chunking.chunker import split_text
from app.services.chunking.exceptions import ConfigurationError

logger = get_logger(__name__)

router = APIRouter(prefix="/split", tags=["splitting"])


@router.post("", response_model=SplitResponse)
def split(body: SplitRequest) -> SplitResponse:
    """
    Split the request text. The profile comes from the request, then settings,
    then the active profile in static.json; individual fields can be overridden.
    Invalid configuration is a client error (422).
    """
    settings = get_settings()
    if len(body.text) > settings.max_text_chars:
        raise HTTPException(status_code=413, detail=f"Text exceeds {settings.max_text_chars} characters")
    profile = body.profile or settings.chunking_profile
    try:
        config = resolve_chunking_config(profile, overrides=body.overrides())
        chunks = split_text(body.text, config)
    except ConfigurationError as e:
        logger.info("Rejected chunking config", extra={"profile": profile, "field": e.field})
        raise HTTPException(status_code=422, detail=str(e)) from e
    if profile == "active":
        profile = get_active_profile_name()
    return SplitResponse(
        profile=profile,
        strategy=config.strategy,
        total_chunks=len(chunks),
        oversized_chunks=sum(1 for c in chunks if c.oversized),
        chunks=chunks,
    )


@router.get("/profiles", response_model=ProfilesResponse)
def profiles() -> ProfilesResponse:
    """Configured chunking profiles and the one marked active."""
    return ProfilesResponse(
        active=get_active_profile_name(),
        profiles={name: cfg.public_dict() for name, cfg in load_chunking_profiles().items()},
    )
