"""FastAPI endpoints serving letter avatars."""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping

from fastapi import Depends, FastAPI, HTTPException, Response
from pydantic import BaseModel, Field

from .config import load_settings
from .engine import AvatarService
from .errors import ConfigError, Disabled, IdentityError, RenderError
from .models import DEFAULT_SIZE, RenderedAvatar, UserIdentity
from .options import ACTIVE_VALUE, config_from_options
from .store import create_cache

logger = logging.getLogger(__name__)


class IdentityPayload(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    nickname: str | None = None
    display_name: str | None = None
    username: str | None = None
    email: str | None = None


class AvatarRequest(BaseModel):
    identity: IdentityPayload
    options: dict[str, Any] = Field(default_factory=dict)
    size: int = Field(default=DEFAULT_SIZE, ge=16, le=1024)
    format: Literal["svg", "png"] = "svg"


class AvatarDescriptorResponse(BaseModel):
    letters: str
    background: str
    foreground: str
    shape: str
    fingerprint: str
    media_type: str


def _default_service() -> AvatarService:
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    cache = create_cache(database_url=settings.database_url, max_entries=settings.cache_size)
    return AvatarService(cache=cache)


def create_app(
    service: AvatarService | None = None,
    base_options: Mapping[str, Any] | None = None,
) -> FastAPI:
    app = FastAPI(title="Letter Avatar API", version="0.1.0")
    avatar_service = service if service is not None else _default_service()
    host_options = dict(base_options or {})

    def get_service() -> AvatarService:
        return avatar_service

    def build_avatar(payload: AvatarRequest, local_service: AvatarService) -> RenderedAvatar:
        identity = UserIdentity(**payload.identity.model_dump())
        config = config_from_options(
            {**host_options, **payload.options},
            size=payload.size,
            image_format=payload.format,
        )
        try:
            return local_service.get_avatar(identity, config)
        except Disabled as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (IdentityError, ConfigError) as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RenderError as exc:
            logger.error("Avatar rendering failed: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @app.post("/api/avatars", response_model=AvatarDescriptorResponse)
    def describe_avatar(
        payload: AvatarRequest,
        local_service: AvatarService = Depends(get_service),
    ) -> AvatarDescriptorResponse:
        rendered = build_avatar(payload, local_service)
        return AvatarDescriptorResponse(
            letters=rendered.avatar.letters,
            background=rendered.avatar.background.hex,
            foreground=rendered.avatar.foreground.hex,
            shape=rendered.avatar.shape,
            fingerprint=rendered.fingerprint,
            media_type=rendered.media_type,
        )

    @app.post("/api/avatars/image")
    def avatar_image(
        payload: AvatarRequest,
        local_service: AvatarService = Depends(get_service),
    ) -> Response:
        rendered = build_avatar(payload, local_service)
        return Response(
            content=rendered.image,
            media_type=rendered.media_type,
            headers={"ETag": f'"{rendered.fingerprint}"'},
        )

    return app


app = create_app(base_options={"avatar_default": ACTIVE_VALUE})
