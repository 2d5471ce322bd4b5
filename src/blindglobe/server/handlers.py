"""Message handlers for game logic - testable without WebSocket mocking."""

import logging

from pydantic import ValidationError

from blindglobe.context import AppContext
from blindglobe.game.services import GameService
from blindglobe.game.session import GameSession, GameState
from blindglobe.game.share import format_share_text
from blindglobe.server.messages import (
    ClientMessage,
    GuessPayload,
    ServerMessage,
    error_message,
    share_message,
    state_message,
)

logger = logging.getLogger(__name__)


class MessageHandler:
    """Applies client actions to one player's session.

    Every applied transition is written back to storage, unless the saved
    game could not be read. In that case the handler is read-only so the
    stored snapshot is never overwritten with defaults.
    """

    def __init__(self, player_id: str, ctx: AppContext, game: GameSession, read_only: bool = False):
        self.player_id = player_id
        self.ctx = ctx
        self.game = game
        self.read_only = read_only
        if not read_only:
            self.game.add_listener(self._persist)

    @classmethod
    def connect(cls, player_id: str, ctx: AppContext, today: str | None = None) -> "MessageHandler":
        """Load a player's saved game and enter today's daily round set."""
        with ctx.session() as session:
            result = GameService(session, ctx.generator).load(player_id)

        if result.is_err:
            logger.warning(f"[{player_id}] {result.error}, playing without saving this connection")
            handler = cls(player_id, ctx, GameSession(ctx.generator), read_only=True)
        else:
            handler = cls(player_id, ctx, result.unwrap())

        game = handler.game
        if today is None:
            today = ctx.time_source.resolve_date_key()
        game.initialize(today)
        logger.info(
            f"[{player_id}] Session ready for {today}: state={game.game_state.value}, "
            f"round={game.round}, read_only={handler.read_only}"
        )
        return handler

    def _persist(self, game: GameSession) -> None:
        with self.ctx.session() as session:
            result = GameService(session, self.ctx.generator).save(self.player_id, game)
        if result.is_err:
            logger.warning(f"[{self.player_id}] {result.error}")

    def _state(self, action: str, applied: bool) -> ServerMessage:
        return state_message(self.game.snapshot(), action=action, applied=applied)

    def handle(self, msg: ClientMessage) -> ServerMessage:
        """Route a client message to its action."""
        if msg.type == "state":
            return self.handle_state()
        elif msg.type == "start":
            return self.handle_start()
        elif msg.type == "guess":
            return self.handle_guess(msg.data)
        elif msg.type == "hint":
            return self.handle_hint()
        elif msg.type == "confirm":
            return self.handle_confirm()
        elif msg.type == "next":
            return self.handle_next()
        elif msg.type == "reset":
            return self.handle_reset()
        elif msg.type == "share":
            return self.handle_share()
        elif msg.type == "status":
            return ServerMessage(
                type="status",
                content="Connected and ready",
                data={"player_id": self.player_id, "connected": True},
            )
        return error_message(f"Unknown message type: {msg.type}")

    def handle_state(self) -> ServerMessage:
        """Handle a snapshot request."""
        return self._state("state", True)

    def handle_start(self) -> ServerMessage:
        """Handle a start game request."""
        applied = self.game.start_game()
        if applied:
            logger.info(f"[{self.player_id}] Game started")
        return self._state("start", applied)

    def handle_guess(self, data: dict) -> ServerMessage:
        """Handle a pin placement."""
        try:
            payload = GuessPayload(**data)
        except ValidationError as e:
            logger.error(f"[{self.player_id}] Invalid guess: {e}")
            return error_message(f"Invalid guess: {e.error_count()} invalid field(s)")
        return self._state("guess", self.game.set_temp_guess(payload.lat, payload.lng))

    def handle_hint(self) -> ServerMessage:
        """Handle a hint request."""
        applied = self.game.use_hint()
        if applied:
            logger.info(f"[{self.player_id}] Hint level {self.game.hint_level} used")
        return self._state("hint", applied)

    def handle_confirm(self) -> ServerMessage:
        """Handle a guess confirmation."""
        return self._state("confirm", self.game.confirm_guess())

    def handle_next(self) -> ServerMessage:
        """Handle advancing to the next round."""
        return self._state("next", self.game.next_round())

    def handle_reset(self) -> ServerMessage:
        """Handle a manual reset to the start screen."""
        logger.info(f"[{self.player_id}] Manual reset")
        return self._state("reset", self.game.reset_game())

    def handle_share(self) -> ServerMessage:
        """Handle a share text request."""
        if self.game.game_state != GameState.FINISHED or self.game.daily is None:
            return error_message("Finish today's game to share your score")
        text = format_share_text(
            total_score=self.game.total_score,
            date_key=self.game.daily.date_key,
            site=self.ctx.settings.share_site,
        )
        return share_message(text, self.game.total_score, self.game.daily.date_key)
