"""Text client for playing against the WebSocket server without a globe."""

import asyncio
import json
import sys

import websockets

from blindglobe.config import get_settings

HELP_TEXT = """
Available commands:
  /start              - Start today's game
  /guess <lat> <lng>  - Place your pin (e.g. /guess 35.0 139.0)
  /hint               - Unlock the next hint (costs points)
  /confirm            - Confirm your pin
  /next               - Next round / finish game
  /share              - Show share text for a finished game
  /state              - Show the current state
  /reset              - Back to the start screen
  /help               - Show this help
  quit/exit           - Disconnect
"""

SIMPLE_COMMANDS = {
    "start": "start",
    "hint": "hint",
    "confirm": "confirm",
    "next": "next",
    "finish": "next",
    "share": "share",
    "state": "state",
    "status": "state",
    "reset": "reset",
}


def parse_command(user_input: str, player_id: str) -> dict | None:
    """Parse user input into a message dict.

    Returns None for quit commands.
    """
    text = user_input.strip()

    if text.lower() in ("quit", "exit"):
        return None

    if not text.startswith("/"):
        print("Commands start with '/'. Type /help for available commands")
        return {"_skip": True}

    parts = text[1:].split()
    cmd = parts[0].lower() if parts else ""
    args = parts[1:]

    if cmd == "help":
        print(HELP_TEXT)
        return {"_skip": True}

    elif cmd in ("guess", "pin"):
        if len(args) != 2:
            print("Usage: /guess <lat> <lng>")
            return {"_skip": True}
        try:
            lat, lng = float(args[0]), float(args[1])
        except ValueError:
            print("Latitude and longitude must be numbers")
            return {"_skip": True}
        return {"type": "guess", "player_id": player_id, "data": {"lat": lat, "lng": lng}}

    elif cmd in SIMPLE_COMMANDS:
        return {"type": SIMPLE_COMMANDS[cmd], "player_id": player_id, "content": ""}

    print(f"Unknown command: /{cmd}")
    print("Type /help for available commands")
    return {"_skip": True}


def format_state(data: dict) -> list[str]:
    """Format a session snapshot for display."""
    state = data.get("game_state", "start")
    total_rounds = data.get("total_rounds", 3)
    lines = [f"Round {data.get('round', 1)} / {total_rounds}   Score: {data.get('total_score', 0)}"]

    if state in ("playing", "revealed"):
        reference = data.get("reference_city") or {}
        target = data.get("target_city") or {}
        if reference:
            lines.append(
                f"Reference: {reference.get('name')} ({reference.get('lat')}, {reference.get('lng')})"
            )
        lines.append(f"To find: {target.get('name', '?')}")

        hint = data.get("hint", {})
        if hint.get("country"):
            lines.append(f"Hint: it is in {hint['country']}")
        if hint.get("show_outlines"):
            lines.append("Hint: country outlines are visible")

    if state == "playing" and data.get("temp_guess"):
        pin = data["temp_guess"]
        lines.append(f"Pin at ({pin['lat']}, {pin['lng']}) - /confirm to lock it in")

    if state == "revealed":
        target = data.get("target_city") or {}
        lines.append(f"{target.get('name')} was {data.get('last_distance_km')} km away")
        lines.append(f"Guess score: {data.get('round_score', 0)}")
        if data.get("round_penalty"):
            lines.append(f"Hint penalty: -{data['round_penalty']}")
        lines.append(f"Round total: {data.get('net_round_score', 0)}")

    if state == "finished":
        stats = data.get("stats", {})
        lines.append(f"Final score: {data.get('total_score', 0)}")
        lines.append(
            f"Games played: {stats.get('games_played', 0)}   "
            f"High score: {stats.get('high_score', 0)}   "
            f"Average: {stats.get('average_score', 0)}"
        )
    return lines


def format_response(response_data: dict) -> str:
    """Format a server response for display."""
    msg_type = response_data.get("type", "response")
    content = response_data.get("content", "")
    data = response_data.get("data", {})
    metadata = response_data.get("metadata", {})

    if msg_type == "error":
        return f"[ERROR] {content}"

    elif msg_type == "connected":
        return f"[CONNECTED] {response_data.get('message', '')} ({response_data.get('date_key', '')})"

    elif msg_type == "state":
        lines = [f"[{data.get('game_state', 'state').upper()}] {content}"]
        if metadata.get("applied") is False:
            lines.append(f"(/{metadata.get('action', '?')} not available right now)")
        lines.extend(format_state(data))
        return "\n".join(lines)

    elif msg_type == "share":
        return f"[SHARE]\n{content}"

    else:
        return f"[{msg_type.upper()}] {content}"


async def main(player_id: str = "player"):
    """Run the text client.

    Args:
        player_id: Identifier the server stores the game under.
    """
    settings = get_settings()
    uri = f"ws://{settings.host}:{settings.port}/ws/{player_id}"

    print(f"Connecting to {uri}...")
    print("-" * 60)

    try:
        async with websockets.connect(uri) as websocket:
            # Connection message, then the initial state
            for _ in range(2):
                print(format_response(json.loads(await websocket.recv())))
            print("Type /help for commands")
            print("-" * 60)

            while True:
                try:
                    user_input = input("> ").strip()
                except EOFError:
                    break

                if not user_input:
                    continue

                message = parse_command(user_input, player_id)

                if message is None:
                    print("Disconnecting...")
                    break

                if message.get("_skip"):
                    continue

                await websocket.send(json.dumps(message))
                response = await websocket.recv()
                print(format_response(json.loads(response)))
                print("-" * 60)

    except websockets.exceptions.ConnectionClosed:
        print("Connection closed by server")
    except ConnectionRefusedError:
        print(f"Could not connect to server at {uri}")
        print("Make sure the server is running: blindglobe server")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nDisconnected")


def run(player_id: str = "player"):
    """Run the text client synchronously."""
    asyncio.run(main(player_id))


if __name__ == "__main__":
    run(sys.argv[1] if len(sys.argv) > 1 else "player")
