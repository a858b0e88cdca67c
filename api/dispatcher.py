"""
Request dispatcher for spahost.

SPADispatcher is an ASGI application mounted at "/". It classifies every
request path and hands it either to Starlette's StaticFiles or to the SPA
index document.
"""

import logging

import anyio.to_thread
from starlette.exceptions import HTTPException
from starlette.responses import FileResponse
from starlette.staticfiles import StaticFiles
from starlette.types import Receive, Scope, Send
from starlette.websockets import WebSocketClose

from core.classifier import Disposition, classify
from core.root import ContentRoot
from observability.metrics import metrics
from observability.tracing import get_tracer

logger = logging.getLogger(__name__)


class SPADispatcher:
    """
    ASGI handler serving a built SPA.

    Existing files and asset-prefixed paths go to the file server, which
    owns MIME types, ranges, conditional GETs, 404s and path containment.
    Every other path gets index.html with a text/html content type.
    """

    def __init__(self, content_root: ContentRoot):
        """
        Initialize the dispatcher.

        Args:
            content_root: Validated root and index paths
        """
        self.content_root = content_root
        # html=False: directories are never answered with listings or defaults
        self.files = StaticFiles(directory=content_root.root, html=False)
        self.tracer = get_tracer()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await WebSocketClose()(scope, receive, send)
            return

        path = scope["path"]
        disposition = await anyio.to_thread.run_sync(classify, path, self.content_root.root)
        metrics.record_dispatch(disposition.value)
        logger.debug("%s %s -> %s", scope["method"], path, disposition.value)

        with self.tracer.start_as_current_span("spa.dispatch") as span:
            span.set_attribute("spa.disposition", disposition.value)
            if disposition is Disposition.SERVE_INDEX_FALLBACK:
                await self.serve_index(scope, receive, send)
            else:
                await self.files(scope, receive, send)

    async def serve_index(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Send index.html for the current request without redirecting."""
        # Same method policy as StaticFiles
        if scope["method"] not in ("GET", "HEAD"):
            raise HTTPException(status_code=405)
        response = FileResponse(self.content_root.index_path, media_type="text/html")
        await response(scope, receive, send)
