"""
Register API Routes
===================
HTTP surface of the nameserver.

Endpoints:
  GET  /          — liveness text
  POST /register  — body is the node's address (plain text);
                    returns its parent as {url, service_id}, or an
                    empty body for the root

The service identifier comes from the `service_id` query parameter,
then the X-Service-Id header, then the address itself.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from core.errors import NameserverError
from core.registration import RegistrationService

log = logging.getLogger("register_routes")

router = APIRouter(tags=["register"])


class ConnectServer(BaseModel):
    """Parent node as seen by a registering child."""
    url: str
    service_id: str


def _service(request: Request) -> RegistrationService:
    return request.app.state.registration


@router.get("/", response_class=PlainTextResponse)
def hello():
    return "Hello world!"


@router.post("/register", responses={200: {"model": ConnectServer}})
async def register(
    request: Request,
    service_id: Optional[str] = Query(None),
    x_service_id: Optional[str] = Header(None),
):
    raw = (await request.body()).decode("utf-8", errors="replace")
    address = raw.strip()
    if not address:
        raise HTTPException(status_code=400, detail="address body is empty")
    sid = service_id if service_id is not None else x_service_id
    if sid is None:
        sid = address

    # Store calls block; keep them off the event loop
    parent = await run_in_threadpool(_service(request).register, address, sid)
    if parent is None:
        return Response(content=b"", status_code=200)
    return JSONResponse(ConnectServer(**parent.to_body()).model_dump())


async def nameserver_error_handler(request: Request, exc: NameserverError):
    log.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")
    return PlainTextResponse(f"{type(exc).__name__}: {exc}", status_code=500)
