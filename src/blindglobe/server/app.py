"""FastAPI application with WebSocket endpoint."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from blindglobe.context import AppContext, create_context
from blindglobe.db.session import create_tables
from blindglobe.game.daily_seed import parse_date_key
from blindglobe.server.handlers import MessageHandler
from blindglobe.server.messages import (
    ClientMessage,
    ConnectionMessage,
    ServerMessage,
    error_message,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket connections and per-player sessions."""

    def __init__(self):
        self.active_connections: dict[str, WebSocket] = {}
        self.handlers: dict[str, MessageHandler] = {}

    async def connect(self, websocket: WebSocket, player_id: str, ctx: AppContext) -> MessageHandler:
        """Accept a new connection and load the player's session."""
        await websocket.accept()
        self.active_connections[player_id] = websocket

        # The trusted time check may block on the network
        handler = await asyncio.to_thread(MessageHandler.connect, player_id, ctx)
        self.handlers[player_id] = handler

        logger.info(f"Player connected: {player_id}")
        return handler

    def disconnect(self, player_id: str):
        """Remove a connection and clean up resources."""
        self.active_connections.pop(player_id, None)
        self.handlers.pop(player_id, None)
        logger.info(f"Player disconnected: {player_id}")


manager = ConnectionManager()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup - create context
    ctx = create_context()
    app.state.ctx = ctx

    settings = ctx.settings
    logger.info(f"Blind Globe server starting on {settings.host}:{settings.port}")
    logger.info(f"Daily timezone: {settings.timezone} (trust_source={settings.trust_source})")
    logger.info(f"Database: {settings.database_url}")

    create_tables(ctx.engine)
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Blind Globe server shutting down")


app = FastAPI(
    title="Blind Globe Backend",
    description="Daily geography guessing game server",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "blindglobe"}


@app.get("/daily")
async def today_rounds(request: Request):
    """Today's rounds for the configured timezone."""
    ctx: AppContext = request.app.state.ctx
    date_key = await asyncio.to_thread(ctx.time_source.resolve_date_key)
    return ctx.generator.generate(date_key).to_dict()


@app.get("/daily/{date_key}")
async def daily_rounds(date_key: str, request: Request):
    """Rounds for a given daily key."""
    ctx: AppContext = request.app.state.ctx
    try:
        date_key = parse_date_key(date_key)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date key: {date_key}")
    return ctx.generator.generate(date_key).to_dict()


@app.websocket("/ws/{player_id}")
async def websocket_endpoint(websocket: WebSocket, player_id: str):
    """WebSocket endpoint for player communication."""
    ctx: AppContext = app.state.ctx
    handler = await manager.connect(websocket, player_id, ctx)
    game = handler.game

    try:
        connection_msg = ConnectionMessage(
            type="connected",
            player_id=player_id,
            message=f"Welcome, {player_id}! Find the city on the globe.",
            date_key=game.daily.date_key if game.daily else "",
        )
        await websocket.send_json(connection_msg.model_dump())
        await websocket.send_json(handler.handle_state().model_dump())

        while True:
            data = await websocket.receive_json()
            if not isinstance(data, dict):
                logger.error(f"[{player_id}] Message is not a JSON object: {type(data).__name__}")
                await websocket.send_json(error_message("Message must be a JSON object").model_dump())
                continue
            logger.info(f"[{player_id}] Received message: {data.get('type', 'unknown')}")

            try:
                msg = ClientMessage(**data)
            except ValidationError as e:
                logger.error(f"[{player_id}] Invalid message format: {e}")
                response = error_message(f"Invalid message format: {str(e)}")
                await websocket.send_json(response.model_dump())
                continue

            response: ServerMessage = handler.handle(msg)
            await websocket.send_json(response.model_dump())

    except WebSocketDisconnect:
        logger.info(f"Player {player_id} disconnected")
    finally:
        manager.disconnect(player_id)
