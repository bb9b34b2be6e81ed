"""Headless-safe plotting adapters."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Tuple


class PlotAdapter:
    """Record per-step losses and draw them with matplotlib on ``close``.

    The figure shows the total loss.  When an L1 term was active it also
    splits the total into its cross-entropy and penalty parts.
    """

    def __init__(self, run_dir: str | Path, enable_plots: bool = False):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self._history: List[Tuple[int, float, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    @property
    def plot_path(self) -> Path:
        return self.run_dir / "loss.png"

    @property
    def history(self) -> List[Tuple[int, float, float]]:
        """``(step, total loss, l1 penalty)`` tuples recorded so far."""

        return list(self._history)

    def on_step(self, step: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        loss = float(metrics.get("loss", 0.0))
        penalty = float(metrics.get("l1_penalty", 0.0))
        self._history.append((step, loss, penalty))

    def close(self) -> None:
        if not self.enable_plots or not self._history:
            return
        import matplotlib

        matplotlib.use("Agg", force=True)
        import matplotlib.pyplot as plt  # imported lazily for headless safety

        steps, totals, penalties = zip(*self._history)
        fig, ax = plt.subplots()
        ax.plot(steps, totals, label="total")
        if any(p > 0.0 for p in penalties):
            ax.plot(steps, [t - p for t, p in zip(totals, penalties)], label="cross-entropy")
            ax.plot(steps, penalties, linestyle="--", label="L1 penalty")
        ax.set_xlabel("Step")
        ax.set_ylabel("Loss")
        ax.set_title("Training Curve")
        ax.legend()
        fig.savefig(self.plot_path)
        plt.close(fig)
        self._history.clear()

    __call__ = on_step
