"""FastAPI application exposing the completion proxy.

Run with:
    relaychat serve
"""

import fastapi
from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from .config import ProxySettings
from .service import ChatProxy


def create_app(proxy: ChatProxy | None = None) -> fastapi.FastAPI:
    """Create the proxy application.

    Args:
        proxy: Request handler to serve (default: built from environment variables)
    """
    app = fastapi.FastAPI(title="relaychat", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.proxy = proxy or ChatProxy(ProxySettings.from_env())

    async def get_proxy(request: Request) -> ChatProxy:
        """Dependency to get the configured proxy."""
        return request.app.state.proxy

    @app.post("/api/chat")
    async def post_chat(request: Request, proxy: ChatProxy = Depends(get_proxy)) -> JSONResponse:
        """Answer a chat request with a single JSON envelope."""
        body = await request.body()
        status, response = await proxy.handle(body)
        return JSONResponse(response.to_wire(), status_code=status)

    return app
