"""Catalog status endpoints and the token-protected rebuild."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from meal_scorer.containers import AppContainer

router = APIRouter(prefix="/catalog", tags=["catalog"])

_logger = logging.getLogger(__name__)


def _get_admin_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str | None = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not admin_token or not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/status")
async def catalog_status(request: Request) -> dict[str, object]:
    """Report whether the index is ready for searches."""
    container: AppContainer = request.app.state.container
    return asdict(container.catalog_service.status())


@router.get("/stats")
async def catalog_stats(request: Request) -> dict[str, object]:
    """Return index sizes and build times."""
    container: AppContainer = request.app.state.container
    return asdict(container.catalog_service.stats())


@router.post("/rebuild", dependencies=[Depends(require_admin)])
async def rebuild_catalog(request: Request) -> dict[str, object]:
    """Reload the catalog file and rebuild both indexes."""
    container: AppContainer = request.app.state.container
    try:
        index = await container.catalog_service.build_in_background()
    except FileNotFoundError as exc:
        _logger.warning("Catalog rebuild failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Catalog file not found: {exc.filename}",
        ) from exc
    return asdict(index.stats())
