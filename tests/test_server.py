"""Tests for the WebSocket server and message handlers."""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from blindglobe.db.repositories import SnapshotRepository
from blindglobe.game.session import GameState
from blindglobe.server.app import app, manager
from blindglobe.server.handlers import MessageHandler
from blindglobe.server.messages import (
    ClientMessage,
    ConnectionMessage,
    GuessPayload,
    ServerMessage,
    error_message,
)


def _msg(msg_type: str, **data) -> ClientMessage:
    return ClientMessage(type=msg_type, player_id="test", data=data)


def _play_day(handler: MessageHandler) -> None:
    """Play all three rounds with exact guesses."""
    handler.handle(_msg("start"))
    for _ in range(3):
        target = handler.game.current_target
        handler.handle(_msg("guess", lat=target.lat, lng=target.lng))
        handler.handle(_msg("confirm"))
        handler.handle(_msg("next"))


class TestMessages:
    """Tests for message schemas."""

    def test_client_message_action(self):
        msg = ClientMessage(type="hint", player_id="test")
        assert msg.type == "hint"
        assert msg.content == ""
        assert msg.data == {}

    def test_client_message_guess(self):
        msg = ClientMessage(type="guess", player_id="test", data={"lat": 1.5, "lng": 2.5})
        assert msg.data["lat"] == 1.5

    def test_client_message_unknown_type(self):
        with pytest.raises(ValueError):
            ClientMessage(type="teleport", player_id="test")

    def test_guess_payload_bounds(self):
        with pytest.raises(ValueError):
            GuessPayload(lat=91.0, lng=0.0)

    def test_server_message_defaults(self):
        msg = ServerMessage(type="state", content="Place your pin.")
        assert msg.data == {}
        assert msg.metadata == {}

    def test_error_message(self):
        msg = error_message("nope")
        assert msg.type == "error"
        assert msg.data == {"error": "nope"}

    def test_connection_message(self):
        msg = ConnectionMessage(type="connected", player_id="test", message="Hi")
        assert msg.date_key == ""


class TestMessageHandler:
    """Tests for applying actions without a WebSocket."""

    def test_connect_fresh_player(self, test_context):
        handler = MessageHandler.connect("p1", test_context, today="2024-01-01")
        assert handler.game.game_state == GameState.START
        assert handler.game.daily.date_key == "2024-01-01"

    def test_actions_report_applied(self, test_context):
        handler = MessageHandler.connect("p1", test_context, today="2024-01-01")

        response = handler.handle(_msg("confirm"))
        assert response.type == "state"
        assert response.metadata == {"action": "confirm", "applied": False}

        response = handler.handle(_msg("start"))
        assert response.metadata["applied"] is True
        assert response.data["game_state"] == "playing"

    def test_invalid_guess(self, test_context):
        handler = MessageHandler.connect("p1", test_context, today="2024-01-01")
        handler.handle(_msg("start"))
        response = handler.handle(_msg("guess", lat="north"))
        assert response.type == "error"
        assert handler.game.temp_guess is None

    def test_progress_survives_reconnect(self, test_context):
        """Test every applied action is saved for the next connection."""
        handler = MessageHandler.connect("p1", test_context, today="2024-01-01")
        handler.handle(_msg("start"))
        handler.handle(_msg("hint"))
        handler.handle(_msg("guess", lat=10.0, lng=20.0))

        again = MessageHandler.connect("p1", test_context, today="2024-01-01")
        assert again.game.game_state == GameState.PLAYING
        assert again.game.hint_level == 1

    def test_finished_day_and_next_day(self, test_context):
        """Test a finished day stays finished until the next day."""
        handler = MessageHandler.connect("p1", test_context, today="2024-01-01")
        _play_day(handler)
        assert handler.game.game_state == GameState.FINISHED
        assert handler.game.total_score == 15000

        same_day = MessageHandler.connect("p1", test_context, today="2024-01-01")
        assert same_day.game.game_state == GameState.FINISHED
        assert same_day.handle(_msg("start")).metadata["applied"] is False

        next_day = MessageHandler.connect("p1", test_context, today="2024-01-02")
        assert next_day.game.game_state == GameState.START
        assert next_day.game.stats.games_played == 1
        assert next_day.game.stats.high_score == 15000

    def test_failed_read_does_not_overwrite_save(self, test_context):
        """Test a storage error on load never replaces the saved game."""
        handler = MessageHandler.connect("p1", test_context, today="2024-01-01")
        _play_day(handler)

        real_get = SnapshotRepository.get
        failures = []

        def get_once_locked(repo, player_id):
            if not failures:
                failures.append(player_id)
                raise OperationalError("SELECT", {}, Exception("database is locked"))
            return real_get(repo, player_id)

        with patch.object(SnapshotRepository, "get", autospec=True, side_effect=get_once_locked):
            offline = MessageHandler.connect("p1", test_context, today="2024-01-02")
            assert offline.read_only is True
            assert offline.game.stats.games_played == 0
            offline.handle(_msg("start"))

        assert failures == ["p1"]
        restored = MessageHandler.connect("p1", test_context, today="2024-01-02")
        assert restored.read_only is False
        assert restored.game.stats.games_played == 1
        assert restored.game.stats.high_score == 15000

    def test_share(self, test_context):
        handler = MessageHandler.connect("p1", test_context, today="2024-01-01")
        assert handler.handle(_msg("share")).type == "error"

        _play_day(handler)
        response = handler.handle(_msg("share"))
        assert response.type == "share"
        assert "blindglobe.test" in response.content
        assert "2024-01-01" in response.content
        assert "Score: 15000" in response.content

    def test_players_are_independent(self, test_context):
        one = MessageHandler.connect("p1", test_context, today="2024-01-01")
        MessageHandler.connect("p2", test_context, today="2024-01-01")
        one.handle(_msg("start"))

        assert MessageHandler.connect("p2", test_context, today="2024-01-01").game.game_state == (
            GameState.START
        )


@pytest.fixture
def client(test_context):
    """Test client whose lifespan uses the in-memory context."""
    with patch("blindglobe.server.app.create_context", return_value=test_context):
        with TestClient(app) as test_client:
            yield test_client
    manager.active_connections.clear()
    manager.handlers.clear()


class TestHttpEndpoints:
    """Tests for the HTTP endpoints."""

    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "blindglobe"}

    def test_daily_for_key(self, client, generator):
        response = client.get("/daily/2024-05-01")
        assert response.status_code == 200
        assert response.json() == generator.generate("2024-05-01").to_dict()

    def test_daily_today(self, client):
        response = client.get("/daily")
        assert response.status_code == 200
        assert len(response.json()["target_cities"]) == 3

    def test_daily_invalid_key(self, client):
        response = client.get("/daily/2024-02-30")
        assert response.status_code == 400


class TestWebSocket:
    """Tests for the WebSocket endpoint."""

    def test_full_game(self, client):
        """Test playing a whole day over the socket."""
        with client.websocket_connect("/ws/socket-player") as ws:
            connected = ws.receive_json()
            assert connected["type"] == "connected"
            assert connected["date_key"]

            state = ws.receive_json()
            assert state["type"] == "state"
            assert state["data"]["game_state"] == "start"

            ws.send_json({"type": "start", "player_id": "socket-player"})
            state = ws.receive_json()

            for round_number in (1, 2, 3):
                assert state["data"]["round"] == round_number
                target = state["data"]["target_city"]
                ws.send_json(
                    {
                        "type": "guess",
                        "player_id": "socket-player",
                        "data": {"lat": target["lat"], "lng": target["lng"]},
                    }
                )
                ws.receive_json()
                ws.send_json({"type": "confirm", "player_id": "socket-player"})
                revealed = ws.receive_json()
                assert revealed["data"]["game_state"] == "revealed"
                assert revealed["data"]["round_score"] == 5000
                ws.send_json({"type": "next", "player_id": "socket-player"})
                state = ws.receive_json()

            assert state["data"]["game_state"] == "finished"
            assert state["data"]["stats"]["games_played"] == 1

            ws.send_json({"type": "share", "player_id": "socket-player"})
            share = ws.receive_json()
            assert share["type"] == "share"
            assert share["data"]["total_score"] == 15000

    def test_invalid_message(self, client):
        with client.websocket_connect("/ws/socket-player") as ws:
            ws.receive_json()
            ws.receive_json()
            ws.send_json({"type": "teleport"})
            response = ws.receive_json()
            assert response["type"] == "error"

    def test_non_object_message(self, client):
        """Test a JSON array is rejected and the connection stays usable."""
        with client.websocket_connect("/ws/socket-player") as ws:
            ws.receive_json()
            ws.receive_json()
            ws.send_json(["start"])
            response = ws.receive_json()
            assert response["type"] == "error"

            ws.send_json({"type": "status", "player_id": "socket-player"})
            assert ws.receive_json()["type"] == "status"
