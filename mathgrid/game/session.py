"""Game session: found-target bookkeeping, attempt counting and lifecycle."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, List, Optional, Sequence, Tuple

from ..config import DEFAULT_BOARD_SIZE, GameConfig
from ..core.board import GameBoard
from ..core.evaluator import Number
from ..generator import BoardGenerator, Difficulty, generate_targets
from ..selection import Release, SelectionEngine, SelectionState, create_selection
from ..solvers import Solution, iter_solutions

logger = logging.getLogger(__name__)


class SessionState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    ABANDONED = "abandoned"


@dataclass(frozen=True)
class GameResult:
    """Finalized score handed to the caller for persisting."""
    elapsed_time: int
    attempt_count: int
    difficulty: str
    board_size: int

    def to_dict(self):
        return {
            "time": self.elapsed_time,
            "attempts": self.attempt_count,
            "difficulty": self.difficulty,
            "boardSize": self.board_size,
        }


@dataclass(frozen=True)
class ReleaseOutcome:
    """What happened when a selection was released."""
    release: Release
    counted: bool = False
    new_target: Optional[Number] = None
    game_result: Optional[GameResult] = None


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session for one rendered frame."""
    board: Optional[GameBoard]
    selection: SelectionState
    targets: Tuple[Number, ...]
    found_targets: FrozenSet[Number]
    attempt_count: int
    elapsed_time: int
    state: SessionState

    @property
    def path(self):
        return self.selection.path

    @property
    def expression_text(self) -> str:
        return self.selection.expression_text

    @property
    def result(self) -> Optional[Number]:
        return self.selection.result


def format_time(seconds: int) -> str:
    """Render elapsed seconds as m:ss."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}:{secs:02d}"


class GameSession:
    """
    One player's game on one board.

    States run IDLE -> PLAYING -> WON or ABANDONED. Every input event is
    handled synchronously; events that arrive outside PLAYING are ignored.
    The found-target set belongs to this session alone and only grows
    while it is played.
    """

    def __init__(
        self,
        mode: str = "linear",
        generator: Optional[BoardGenerator] = None,
        on_won: Optional[Callable[[GameResult], None]] = None,
    ):
        """
        Args:
            mode: Selection strategy name ("linear" or "concatenation").
            generator: Board source for ``new_game``. A fresh unseeded one
                is created if omitted.
            on_won: Called once with the GameResult when the game is won.
        """
        self.mode = mode
        self.generator = generator or BoardGenerator()
        self.on_won = on_won

        self.state = SessionState.IDLE
        self.board: Optional[GameBoard] = None
        self.targets: Tuple[Number, ...] = ()
        self.difficulty = Difficulty.EASY
        self.selection: Optional[SelectionEngine] = None
        self._found: set = set()
        self.attempt_count = 0
        self.elapsed_time = 0
        self.solutions: List[Solution] = []
        self.result: Optional[GameResult] = None

    @classmethod
    def from_config(cls, config: GameConfig, **kwargs) -> GameSession:
        """Create a session and start a generated game from a GameConfig."""
        kwargs.setdefault("generator", BoardGenerator(seed=config.seed))
        session = cls(mode=config.mode, **kwargs)
        session.new_game(config.difficulty, config.board_size)
        return session

    def new_game(self, difficulty=Difficulty.EASY, board_size: int = DEFAULT_BOARD_SIZE) -> None:
        """Generate a fresh board and targets, replacing any current game."""
        difficulty = Difficulty.from_name(difficulty)
        board = self.generator.generate(difficulty, board_size)
        self.load(board, generate_targets(board), difficulty)

    def load(self, board: GameBoard, targets: Sequence[Number], difficulty=Difficulty.EASY) -> None:
        """Start playing a given board with an explicit target set."""
        unique: List[Number] = []
        for target in targets:
            if target not in unique:
                unique.append(target)

        self.board = board
        self.targets = tuple(unique)
        self.difficulty = Difficulty.from_name(difficulty)
        self.selection = create_selection(self.mode, board)
        self._found = set()
        self.attempt_count = 0
        self.elapsed_time = 0
        self.solutions = []
        self.result = None
        self.state = SessionState.PLAYING
        logger.info(
            "Started %s %dx%d game with %d targets",
            self.difficulty.value, board.size, board.size, len(self.targets),
        )

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.PLAYING

    @property
    def found_targets(self) -> FrozenSet[Number]:
        return frozenset(self._found)

    @property
    def remaining_targets(self) -> List[Number]:
        """Targets not found yet, in target order."""
        return [t for t in self.targets if t not in self._found]

    def selection_start(self, row: int, col: int) -> bool:
        if not self.is_active:
            logger.debug("Ignoring selection start in state %s", self.state.value)
            return False
        return self.selection.start(row, col)

    def selection_extend(self, row: int, col: int) -> bool:
        if not self.is_active:
            logger.debug("Ignoring selection extend in state %s", self.state.value)
            return False
        return self.selection.extend(row, col)

    def selection_release(self) -> Optional[ReleaseOutcome]:
        """
        Score the current selection.

        A release counts as an attempt when the path has at least three
        cells and its expression evaluates. A counted result that matches
        an unfound target is recorded; finding the last one wins the game.

        Returns:
            The outcome, or None if there was nothing to release.
        """
        if not self.is_active:
            return None
        release = self.selection.release()
        if release is None:
            return None

        if len(release.path) < 3 or not release.is_evaluable:
            return ReleaseOutcome(release)

        self.attempt_count += 1
        value = release.result
        if value not in self.targets or value in self._found:
            return ReleaseOutcome(release, counted=True)

        self._found.add(value)
        logger.info("Found target %s (%d/%d)", value, len(self._found), len(self.targets))

        game_result = None
        if len(self._found) == len(self.targets):
            game_result = self._win()
        return ReleaseOutcome(release, counted=True, new_target=value, game_result=game_result)

    def clear_selection(self) -> None:
        """Remove the released path from view."""
        if self.selection is not None:
            self.selection.clear()

    def tick(self, seconds: int = 1) -> None:
        """Advance the clock. Only a game in progress accumulates time."""
        if self.is_active:
            self.elapsed_time += seconds

    def abandon(self) -> List[Solution]:
        """
        Give up the current game and reveal hints.

        Returns:
            Every line on the board that reaches an outstanding target.
        """
        if not self.is_active:
            logger.debug("Ignoring abandon in state %s", self.state.value)
            return self.solutions
        self.state = SessionState.ABANDONED
        self.selection.clear()
        self.solutions = list(iter_solutions(self.board, self.remaining_targets))
        logger.info("Game abandoned; %d hint lines for %d targets",
                    len(self.solutions), len(self.remaining_targets))
        return self.solutions

    def _win(self) -> GameResult:
        self.state = SessionState.WON
        self.result = GameResult(
            elapsed_time=self.elapsed_time,
            attempt_count=self.attempt_count,
            difficulty=self.difficulty.value,
            board_size=self.board.size,
        )
        logger.info("Game won in %s with %d attempts",
                    format_time(self.elapsed_time), self.attempt_count)
        if self.on_won is not None:
            self.on_won(self.result)
        return self.result

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board,
            selection=self.selection.state if self.selection else SelectionState(),
            targets=self.targets,
            found_targets=self.found_targets,
            attempt_count=self.attempt_count,
            elapsed_time=self.elapsed_time,
            state=self.state,
        )
