"""Social account connection endpoints."""

from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from socialcast.api.deps import WorkspaceDep
from socialcast.config import settings
from socialcast.domain.callback import CallbackLocation
from socialcast.domain.catalog import PLATFORM_CATALOG
from socialcast.errors import (
    BackendError,
    DisconnectError,
    HandshakeCompleteError,
    HandshakeInitError,
    ValidationError,
)
from socialcast.logging import get_logger

router = APIRouter(prefix="/connections", tags=["Connections"])
# Mounted at settings.connections_path, where identity providers send users back
callback_router = APIRouter(tags=["Connections"])
logger = get_logger(__name__)


class ConnectionResponse(BaseModel):
    """Connection state of one catalog platform."""

    platform: str
    name: str
    auth_id: str
    connect_label: str
    state: str
    connected: bool
    account_name: str | None = None


class ConnectionListResponse(BaseModel):
    """Connection state of every catalog platform."""

    connections: list[ConnectionResponse]
    total: int


class LinkResponse(BaseModel):
    """Where to send the user to authorize a platform."""

    platform: str
    url: str


def _connection_list(
    workspace: WorkspaceDep,
    location: CallbackLocation | None = None,
) -> ConnectionListResponse:
    connections = []
    for descriptor in PLATFORM_CATALOG:
        account = workspace.store.get(descriptor.id)
        connected = workspace.store.is_connected(descriptor.id)
        connections.append(
            ConnectionResponse(
                platform=descriptor.id,
                name=descriptor.display_name,
                auth_id=descriptor.resolved_auth_id,
                connect_label=descriptor.connect_label,
                state=workspace.oauth.state(descriptor.id, location),
                connected=connected,
                account_name=(account.display_name or "User") if connected and account else None,
            )
        )
    return ConnectionListResponse(connections=connections, total=len(connections))


@router.get(
    "",
    response_model=ConnectionListResponse,
    summary="List connections",
    description="List every supported platform with its linking state.",
)
async def list_connections(workspace: WorkspaceDep, refresh: bool = False) -> ConnectionListResponse:
    """List platforms and whether each is linked."""
    if refresh:
        try:
            await workspace.oauth.refresh()
        except BackendError as e:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return _connection_list(workspace)


@router.post(
    "/{platform}/link",
    response_model=LinkResponse,
    summary="Start linking",
    description="Get the identity provider URL the user must visit to link a platform.",
)
async def begin_link(platform: str, workspace: WorkspaceDep) -> LinkResponse:
    """Start the OAuth handshake for a platform."""
    try:
        url = await workspace.oauth.begin_link(platform)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except HandshakeInitError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return LinkResponse(platform=platform, url=url)


@router.delete(
    "/{platform}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Disconnect",
    description="Unlink a platform account.",
)
async def disconnect(platform: str, workspace: WorkspaceDep) -> Response:
    """Disconnect a platform once the backend confirms."""
    try:
        await workspace.oauth.disconnect(platform)
    except DisconnectError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@callback_router.get(
    settings.connections_path,
    summary="OAuth return",
    description="Completes a pending account-linking handshake.",
)
async def oauth_return(request: Request, workspace: WorkspaceDep) -> Response:
    """Landing page for identity provider redirects.

    A pending callback is completed and the browser is redirected to the
    same page without the callback parameters, so a reload cannot replay
    them. A plain visit just lists the connections.
    """
    location = CallbackLocation(str(request.url))

    try:
        account = await workspace.oauth.handle_return(location)
    except HandshakeCompleteError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    if account is None:
        return Response(
            content=_connection_list(workspace, location).model_dump_json(),
            media_type="application/json",
        )

    return RedirectResponse(url=location.url, status_code=status.HTTP_303_SEE_OTHER)
