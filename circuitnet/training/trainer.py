"""Step-by-step training loop with pluggable metric callbacks."""

from __future__ import annotations

import logging
from typing import Callable, List, Mapping, Sequence

from ..core.network import Network
from ..core.types import RunResult, Sample, TrainSnapshot
from .settings import TrainSettings

logger = logging.getLogger(__name__)

SampleSource = Callable[[int], Sample]


class Trainer:
    """Drive :meth:`Network.train_step` one example at a time.

    This mirrors what an animation loop does: pull a sample for the current
    step, train on it, publish the loss, keep the snapshot for display.
    """

    def __init__(
        self,
        network: Network,
        source: SampleSource,
        settings: TrainSettings | None = None,
        callbacks: Sequence[object] | None = None,
    ) -> None:
        self.network = network
        self.source = source
        self.settings = settings or TrainSettings()
        self.callbacks = list(callbacks or [])
        self.last_snapshot: TrainSnapshot | None = None
        self._step = 0

    @property
    def step(self) -> int:
        return self._step

    def train_once(self) -> TrainSnapshot:
        sample = self.source(self._step)
        snapshot = self.network.train_step(
            sample.inputs, sample.target, self.settings.lr, self.settings.l1
        )
        self.last_snapshot = snapshot
        self._emit(self._step, {"loss": snapshot.loss, "l1_penalty": snapshot.l1_penalty})
        self._step += 1
        return snapshot

    def run(self, steps: int | None = None) -> RunResult:
        total = self.settings.steps if steps is None else steps
        every = max(1, self.settings.log_every)
        losses: List[float] = []
        try:
            for _ in range(total):
                snapshot = self.train_once()
                losses.append(snapshot.loss)
                if self._step % every == 0:
                    logger.info("step %d loss %.6f", self._step, snapshot.loss)
        finally:
            for callback in self.callbacks:
                if hasattr(callback, "close"):
                    callback.close()  # type: ignore[attr-defined]
        return RunResult(
            steps=len(losses),
            first_loss=losses[0] if losses else float("nan"),
            final_loss=losses[-1] if losses else float("nan"),
            losses=losses,
        )

    def _emit(self, step: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_step"):
                callback.on_step(step, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(step, metrics)


__all__ = ["SampleSource", "Trainer"]
