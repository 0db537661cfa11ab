"""
Animated transitions between two layouts.

A TransitionAnimation interpolates node positions with a cubic ease-out
``1 - (1 - t)^3``. ``animate_to_positions`` drives one on a background
thread and hands back an AnimationHandle that can cancel it; passing
``start=False`` leaves the driving (``step()``) to the caller's own frame
clock.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from ..models import ConceptNode

logger = logging.getLogger(__name__)

FrameFn = Callable[[List[ConceptNode]], None]

FRAME_INTERVAL = 1.0 / 60.0


def ease_out_cubic(t: float) -> float:
    t = min(max(t, 0.0), 1.0)
    return 1.0 - (1.0 - t) ** 3


class TransitionAnimation:
    def __init__(
        self,
        current: List[ConceptNode],
        target: List[ConceptNode],
        duration_ms: float,
        on_frame: FrameFn,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.nodes = list(current)
        self.duration = duration_ms / 1000.0
        self.on_frame = on_frame
        self.clock = clock
        self.start_positions: Dict[str, Tuple[float, float]] = {
            n.id: n.position or (0.0, 0.0) for n in current
        }
        self.target_positions: Dict[str, Tuple[float, float]] = {
            n.id: n.position or (0.0, 0.0) for n in target
        }
        self.started_at: Optional[float] = None
        self.frames = 0
        self.finished = False

    def progress(self) -> float:
        if self.started_at is None:
            self.started_at = self.clock()
        if self.duration <= 0:
            return 1.0
        return min((self.clock() - self.started_at) / self.duration, 1.0)

    def frame_at(self, progress: float) -> List[ConceptNode]:
        """Copies of the current nodes interpolated at ``progress``."""
        eased = ease_out_cubic(progress)
        frame = []
        for node in self.nodes:
            sx, sy = self.start_positions.get(node.id, (0.0, 0.0))
            tx, ty = self.target_positions.get(node.id, (sx, sy))
            frame.append(node.with_position((sx + (tx - sx) * eased, sy + (ty - sy) * eased)))
        return frame

    def step(self) -> bool:
        """Emit one frame; return True while more frames are due."""
        if self.finished:
            return False
        t = self.progress()
        self.on_frame(self.frame_at(t))
        self.frames += 1
        if t >= 1.0:
            self.finished = True
        return not self.finished


class AnimationHandle:
    """Control handle returned by ``animate_to_positions``."""

    def __init__(self, animation: TransitionAnimation, frame_interval: float = FRAME_INTERVAL):
        self.animation = animation
        self.frame_interval = frame_interval
        self._cancel = threading.Event()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def cancel(self) -> None:
        self._cancel.set()

    def start(self) -> "AnimationHandle":
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name="concept-graph-animation", daemon=True)
            self._thread.start()
        return self

    def step(self) -> bool:
        """Drive one frame manually; False once finished or cancelled."""
        if self.cancelled or self.done:
            return False
        more = self.animation.step()
        if not more:
            self._done.set()
        return more

    def _run(self) -> None:
        try:
            while self.step():
                if self._cancel.wait(self.frame_interval):
                    break
        except Exception:
            logger.exception("Animation frame callback failed")
        finally:
            self._done.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until finished or cancelled; True if the run has ended."""
        if self._thread is None:
            return self.done
        self._thread.join(timeout)
        return not self._thread.is_alive()


def animate_to_positions(
    current_nodes: List[ConceptNode],
    target_nodes: List[ConceptNode],
    duration_ms: float = 1000.0,
    on_frame: Optional[FrameFn] = None,
    *,
    start: bool = True,
    clock: Callable[[], float] = time.monotonic,
    frame_interval: float = FRAME_INTERVAL,
) -> AnimationHandle:
    """
    Tween ``current_nodes`` towards the positions in ``target_nodes``.

    ``on_frame`` receives the full interpolated node list each frame; the
    final frame is at t = 1 and nothing is scheduled after it.
    """
    animation = TransitionAnimation(
        current_nodes,
        target_nodes,
        duration_ms,
        on_frame or (lambda _nodes: None),
        clock=clock,
    )
    handle = AnimationHandle(animation, frame_interval=frame_interval)
    return handle.start() if start else handle
