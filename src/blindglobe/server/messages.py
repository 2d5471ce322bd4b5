"""WebSocket message schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field  # noqa: I001

# Client message types
ClientMessageType = Literal[
    "state",    # Request the current session snapshot
    "start",    # Start the daily game
    "guess",    # Place or move the unconfirmed pin
    "hint",     # Unlock the next hint level
    "confirm",  # Confirm the pin and score the round
    "next",     # Advance to the next round or finish
    "reset",    # Force back to the start screen
    "share",    # Get the share text
    "status",   # Get connection status
]

# Server message types
ServerMessageType = Literal[
    "state",   # Session snapshot after an action
    "share",   # Share text
    "status",  # Status update
    "error",   # Error message
]


class ClientMessage(BaseModel):
    """Message sent from client to server."""

    type: ClientMessageType = Field(description="Type of message")
    player_id: str = Field(description="Unique identifier for the player")
    content: str = Field(default="", description="Message content or action parameter")
    data: dict[str, Any] = Field(default_factory=dict, description="Additional structured data")


class ServerMessage(BaseModel):
    """Message sent from server to client."""

    type: ServerMessageType = Field(description="Type of response")
    content: str = Field(description="Response content or description")
    data: dict[str, Any] = Field(default_factory=dict, description="Structured response data")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Additional metadata")


class ConnectionMessage(BaseModel):
    """Message sent when a player connects or disconnects."""

    type: Literal["connected", "disconnected"] = Field(description="Connection event type")
    player_id: str = Field(description="Player who connected/disconnected")
    message: str = Field(description="Connection message")
    date_key: str = Field(default="", description="Daily key the session is playing")


class GuessPayload(BaseModel):
    """Coordinates carried by a guess message."""

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


# Helper functions to create common server messages

_STATE_CONTENT = {
    "start": "Ready to play today's globe.",
    "playing": "Place your pin.",
    "revealed": "Round complete!",
    "finished": "Come back tomorrow to play again!",
}


def state_message(snapshot: dict, action: str, applied: bool) -> ServerMessage:
    """Create a session state response."""
    return ServerMessage(
        type="state",
        content=_STATE_CONTENT.get(snapshot.get("game_state", ""), ""),
        data=snapshot,
        metadata={"action": action, "applied": applied},
    )


def share_message(text: str, total_score: int, date_key: str) -> ServerMessage:
    """Create a share text response."""
    return ServerMessage(
        type="share",
        content=text,
        data={"total_score": total_score, "date_key": date_key},
    )


def error_message(error: str) -> ServerMessage:
    """Create an error message."""
    return ServerMessage(
        type="error",
        content=error,
        data={"error": error},
    )
