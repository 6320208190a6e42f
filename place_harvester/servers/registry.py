"""
Place Harvester registry.

Owns the application context and the FastMCP server built from it.
Initializes observability and checks MongoDB connectivity on startup.
"""

from fastmcp import FastMCP
from loguru import logger
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from place_harvester.config import Settings
from place_harvester.context import AppContext
from place_harvester.infrastructure.observability import initialize_observability
from place_harvester.servers.place_harvester_server import build_server


class PlaceHarvesterRegistry:
    def __init__(self, context: AppContext, settings: Settings) -> None:
        self.context = context
        self.settings = settings
        self.server = build_server(context)
        self._is_initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    async def initialize(self) -> None:
        """Bring up observability and report store connectivity."""
        if self._is_initialized:
            return

        logger.info("Initializing place harvester...")

        initialize_observability(
            service_name=self.settings.OTEL_SERVICE_NAME,
            enabled=self.settings.OBSERVABILITY_ENABLED,
        )

        # The server keeps running without MongoDB; inserts fail per request.
        try:
            await self.context.store.ping()
            logger.info("Connected to MongoDB")
        except Exception:
            logger.exception("Error connecting to MongoDB")

        self._is_initialized = True

        all_tools = await self.server.list_tools()
        tool_names = [t.name for t in all_tools]
        logger.info(f"Server initialized with {len(all_tools)} tools: {tool_names}")

    def get_server(self) -> FastMCP:
        return self.server

    async def shutdown(self) -> None:
        """Close the long-lived clients held by the context."""
        await self.context.close()

    def asgi_app(self, inner_app: ASGIApp | None = None) -> ASGIApp:
        """Wrap the server's HTTP app so lifespan startup/shutdown drive init and close.

        Requests arriving without a lifespan (e.g. plain test clients) still
        trigger a lazy initialize.
        """
        if inner_app is None:
            inner_app = self.server.http_app(stateless_http=True)

        async def app(scope: Scope, receive: Receive, send: Send) -> None:
            if scope["type"] == "lifespan":

                async def receive_with_startup() -> Message:
                    message = await receive()
                    if message["type"] == "lifespan.startup":
                        await self.initialize()
                    return message

                async def send_with_shutdown(message: Message) -> None:
                    if message["type"] == "lifespan.shutdown.complete":
                        await self.shutdown()
                    await send(message)

                await inner_app(scope, receive_with_startup, send_with_shutdown)
                return
            if not self._is_initialized:
                await self.initialize()
            await inner_app(scope, receive, send)

        return app
