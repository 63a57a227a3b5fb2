"""
Game Session
============

Game state controller: owns the router, both entity arenas, the score and
the scheduled tasks of a run, and moves between the lifecycle states

    IDLE --start()--> RUNNING --virus hit--> GAME_OVER --restart()--> RUNNING
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from packet_router.router_core.config_loader import GameConfig, get_config
from packet_router.router_core.entity_catalog import EntityCatalog, EntityKind
from packet_router.router_core.entities import EntityArena, FallingEntity, Router
from packet_router.router_core.spawner import EntitySpawner
from packet_router.router_core.motion import MotionUpdater
from packet_router.router_core.collision import CollisionDetector
from packet_router.router_core.scoring import ScoreEvent, ScoreTracker
from packet_router.router_core.high_score import HighScoreStore
from packet_router.router_core.input_handler import Direction, InputHandler
from packet_router.router_core.scheduler import Scheduler, TaskGroup, TaskHandle
from packet_router.router_core.state_snapshot import GameSnapshot, SnapshotBuilder


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameStateError(RuntimeError):
    """Raised when a lifecycle transition is not allowed from the current state."""


@dataclass
class FrameResult:
    """Result of a single frame update."""
    frame: int
    fell_out: List[FallingEntity] = field(default_factory=list)
    caught: List[FallingEntity] = field(default_factory=list)
    score_events: List[ScoreEvent] = field(default_factory=list)
    hit: bool = False

    @property
    def delta_score(self) -> int:
        return sum(e.points for e in self.score_events)


class GameSession:
    """
    One play session.

    Orchestrates:
    - Spawning (one periodic timer per entity kind)
    - Motion and collisions (one frame task, rescheduled every frame)
    - Scoring, levels and the persisted high score
    - Router input

    Time only moves through advance(), so a session can be driven by a
    real clock or stepped frame by frame in tests.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        store=None,
        viewport_height: Optional[int] = None,
        debug: bool = False
    ):
        """
        Initialize session.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for spawn positions.
            store: High score store. Uses the configured storage file if None.
            viewport_height: Derive the playfield height from this viewport
                instead of the configured one.
            debug: Print lifecycle transitions.
        """
        if config is None:
            config = get_config()
        if viewport_height is not None:
            config = config.with_viewport_height(viewport_height)
        if store is None:
            store = HighScoreStore(config=config)

        self._config = config
        self._seed = seed
        self._debug = debug

        self._playfield_width = float(config.playfield.width)
        self._playfield_height = config.playfield.height

        # Subsystems
        self._catalog = EntityCatalog(config)
        self._arenas: Dict[EntityKind, EntityArena] = {
            entity_type.kind: EntityArena(entity_type) for entity_type in self._catalog
        }
        self._router = Router(
            x=0.0,
            y=self._playfield_height - config.router.height - config.router.bottom_margin,
            width=config.router.width,
            height=config.router.height,
            playfield_width=self._playfield_width
        )
        self._router.center()
        self._scheduler = Scheduler(config.timing.frame_interval_ms)
        self._spawner = EntitySpawner(config, seed)
        self._motion = MotionUpdater(self._playfield_height)
        self._collisions = CollisionDetector()
        self._scorer = ScoreTracker(config, store)
        self._input = InputHandler(self._router, config)
        self._snapshot_builder = SnapshotBuilder(config)

        # Lifecycle
        self._state = GameState.IDLE
        self._tasks: Optional[TaskGroup] = None
        self._frame_handle: Optional[TaskHandle] = None
        self._frames: int = 0
        self._runs: int = 0
        self._final_score: Optional[int] = None

        if self._debug:
            print(f"[DEBUG] GameSession initialized")
            print(f"[DEBUG]   Playfield: {self._playfield_width:.0f}x{self._playfield_height:.0f}")
            print(f"[DEBUG]   High score: {self._scorer.high_score}")

    # ------------------------------------------------------------------
    # Properties

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is GameState.RUNNING

    @property
    def is_over(self) -> bool:
        return self._state is GameState.GAME_OVER

    @property
    def playfield_width(self) -> float:
        return self._playfield_width

    @property
    def playfield_height(self) -> float:
        return self._playfield_height

    @property
    def router(self) -> Router:
        return self._router

    @property
    def catalog(self) -> EntityCatalog:
        return self._catalog

    @property
    def packets(self) -> EntityArena:
        return self._arenas[EntityKind.PACKET]

    @property
    def viruses(self) -> EntityArena:
        return self._arenas[EntityKind.VIRUS]

    @property
    def arenas(self) -> Tuple[EntityArena, ...]:
        """Arenas in update order (packets, then viruses)."""
        return (self.packets, self.viruses)

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def tasks(self) -> Optional[TaskGroup]:
        """Scheduled tasks of the current or last run."""
        return self._tasks

    @property
    def score(self) -> int:
        return self._scorer.score

    @property
    def level(self) -> int:
        return self._scorer.level

    @property
    def high_score(self) -> int:
        return self._scorer.high_score

    @property
    def final_score(self) -> Optional[int]:
        """Score at the last game over, None before the first one."""
        return self._final_score

    @property
    def frames(self) -> int:
        """Frames simulated in the current run."""
        return self._frames

    @property
    def runs(self) -> int:
        """Number of runs started in this session."""
        return self._runs

    @property
    def status_line(self) -> str:
        return self._scorer.status_line()

    # ------------------------------------------------------------------
    # Lifecycle

    def start(self) -> None:
        """
        Start the first run: arm both spawn timers and the frame task.

        Raises:
            GameStateError: If the session is not idle.
        """
        if self._state is not GameState.IDLE:
            raise GameStateError(f"start() requires IDLE, session is {self._state.value}")
        self._begin_run()

    def restart(self) -> None:
        """
        Reset the board after a game over and start a new run.

        Raises:
            GameStateError: If the game is not over.
        """
        if self._state is not GameState.GAME_OVER:
            raise GameStateError(f"restart() requires GAME_OVER, session is {self._state.value}")
        self.reset()
        self.start()

    def reset(self) -> None:
        """Clear both arenas, score and level, and recentre the router."""
        if self._tasks is not None:
            self._tasks.cancel_all()
        for arena in self._arenas.values():
            arena.clear()
            arena.reset_speeds()
        self._scorer.reset()
        self._router.center()
        self._frames = 0
        self._frame_handle = None
        self._state = GameState.IDLE

        if self._debug:
            print(f"[DEBUG] Session reset")

    def end_game(self) -> None:
        """
        Enter GAME_OVER: cancel the frame task and both timers and record
        the final score.
        """
        if self._state is not GameState.RUNNING:
            raise GameStateError(f"end_game() requires RUNNING, session is {self._state.value}")

        self._state = GameState.GAME_OVER
        self._final_score = self._scorer.score
        if self._tasks is not None:
            self._tasks.cancel_all()
        self._frame_handle = None

        if self._debug:
            print(f"[DEBUG] GAME OVER after {self._frames} frames, final score {self._final_score}")

    def close(self) -> None:
        """Cancel any scheduled work. The session can no longer advance."""
        if self._tasks is not None:
            self._tasks.cancel_all()
        self._scheduler.clear()

    def __enter__(self) -> "GameSession":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _begin_run(self) -> None:
        self._state = GameState.RUNNING
        self._runs += 1
        self._tasks = TaskGroup()

        for arena in self.arenas:
            self._tasks.add(self._scheduler.call_every(
                arena.entity_type.spawn_interval_ms,
                self._make_spawn_callback(arena.kind),
                name=f"spawn_{arena.kind.value}"
            ))

        self._frame_handle = self._tasks.add(
            self._scheduler.request_frame(self._on_frame)
        )

        if self._debug:
            print(f"[DEBUG] Run {self._runs} started at t={self._scheduler.now_ms:.0f}ms")

    def _make_spawn_callback(self, kind: EntityKind):
        def _spawn() -> None:
            if self._state is GameState.RUNNING:
                self.spawn(kind)
        return _spawn

    def _on_frame(self) -> None:
        if self._state is not GameState.RUNNING:
            return
        self.tick()
        if self._state is GameState.RUNNING and self._tasks is not None:
            self._frame_handle = self._tasks.replace(
                self._frame_handle,
                self._scheduler.request_frame(self._on_frame)
            )

    # ------------------------------------------------------------------
    # Game operations

    def advance(self, elapsed_ms: float) -> int:
        """
        Advance the session clock.

        Args:
            elapsed_ms: Milliseconds of game time to run.

        Returns:
            Number of scheduled callbacks that ran.
        """
        return self._scheduler.advance(elapsed_ms)

    def run_frames(self, count: int) -> int:
        """Advance by a whole number of frames."""
        return self._scheduler.run_frames(count)

    def spawn(self, kind: EntityKind) -> Optional[FallingEntity]:
        """
        Spawn one entity of a kind at the current level.

        Returns:
            The new entity, or None if that kind is at its cap.
        """
        return self._spawner.spawn(self._arenas[kind], self._scorer.level)

    def tick(self) -> FrameResult:
        """
        Run one frame: move everything, then resolve collisions.

        Does nothing unless the session is running.

        Returns:
            FrameResult describing what happened.
        """
        if self._state is not GameState.RUNNING:
            return FrameResult(frame=self._frames)

        self._frames += 1
        result = FrameResult(frame=self._frames)

        result.fell_out = self._motion.step(self.arenas)

        report = self._collisions.check(self._router, self.packets, self.viruses)
        for packet in report.caught:
            result.caught.append(packet)
            result.score_events.append(self.on_caught())

        if report.hit:
            result.hit = True
            self.on_hit()

        return result

    def on_caught(self) -> ScoreEvent:
        """
        Score one caught packet, levelling up every points_per_level.

        A level-up raises the speed of every live entity by one. Entities
        spawned later start from base_speed + level instead.
        """
        event = self._scorer.apply_catch()

        if event.level_up:
            for arena in self.arenas:
                arena.bump_speeds(event.levels_gained)
            if self._debug:
                print(f"[DEBUG] Level {event.level} at score {event.score}")

        if event.new_record and self._debug:
            print(f"[DEBUG] New high score {event.score}")

        return event

    def on_hit(self) -> None:
        """A virus reached the router."""
        self.end_game()

    def move(self, direction: Direction) -> float:
        """
        Move the router one step.

        Returns:
            Router x after the move.
        """
        return self._input.move(direction, active=self.is_running)

    def move_left(self) -> float:
        return self.move(Direction.LEFT)

    def move_right(self) -> float:
        return self.move(Direction.RIGHT)

    def snapshot(self) -> GameSnapshot:
        """Pure-data copy of the current state for rendering."""
        return self._snapshot_builder.build(self)

    def get_info(self) -> Dict[str, object]:
        """Summary of the session state."""
        return {
            "state": self._state.value,
            "score": self._scorer.score,
            "level": self._scorer.level,
            "high_score": self._scorer.high_score,
            "final_score": self._final_score,
            "frames": self._frames,
            "packets": len(self.packets),
            "viruses": len(self.viruses),
            "router_x": self._router.x,
            "time_ms": self._scheduler.now_ms,
        }
