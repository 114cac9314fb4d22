"""Headless-safe plotting adapters."""

from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Tuple

import numpy as np

from ..core.network import NeuralNetwork, decision_grid
from ..core.types import Dataset

CLASS_COLORS = ("#f5576c", "#00f2fe")
MAX_EDGE_WEIGHT = 2.0


def _pyplot():
    import matplotlib

    matplotlib.use("Agg", force=True)
    import matplotlib.pyplot as plt  # imported lazily for headless safety

    return plt


class PlotAdapter:
    """Collect the loss curve and emit matplotlib figures on close."""

    def __init__(self, run_dir: str | Path, enable_plots: bool = False, resolution: int = 50):
        self.enable_plots = enable_plots
        self.run_dir = Path(run_dir)
        self.resolution = resolution
        self._history: List[Tuple[int, float]] = []
        if self.enable_plots:
            self.run_dir.mkdir(parents=True, exist_ok=True)

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        if not self.enable_plots:
            return
        self._history.append((epoch, float(metrics.get("loss", 0.0))))

    __call__ = on_epoch

    def close(self, network: NeuralNetwork, dataset: Dataset) -> List[Path]:
        """Write the figures and return their paths (empty when disabled)."""

        if not self.enable_plots:
            return []
        plt = _pyplot()
        paths = [
            self._plot_boundary(plt, network, dataset),
            self._plot_network(plt, network),
        ]
        if self._history:
            paths.insert(0, self._plot_loss(plt))
        return paths

    def _plot_loss(self, plt) -> Path:
        epochs, losses = zip(*self._history)
        fig, ax = plt.subplots()
        ax.plot(epochs, losses)
        ax.set_xlabel("Epoch")
        ax.set_ylabel("Loss")
        ax.set_title("Training Curve")
        path = self.run_dir / "loss.png"
        fig.savefig(path)
        plt.close(fig)
        return path

    def _plot_boundary(self, plt, network: NeuralNetwork, dataset: Dataset) -> Path:
        grid = decision_grid(network, self.resolution)
        fig, ax = plt.subplots(figsize=(5, 5))
        # grid is indexed [x, y]; imshow wants rows along y
        ax.imshow(
            grid.T,
            origin="lower",
            extent=(-1, 1, -1, 1),
            cmap="coolwarm_r",
            vmin=0.0,
            vmax=1.0,
            alpha=0.6,
        )
        colors = [CLASS_COLORS[int(t)] for t in dataset.targets]
        ax.scatter(
            dataset.inputs[:, 0],
            dataset.inputs[:, 1],
            c=colors,
            s=16,
            edgecolors="white",
            linewidths=0.8,
        )
        ax.set_xlim(-1, 1)
        ax.set_ylim(-1, 1)
        ax.set_title(f"Decision boundary ({dataset.kind})")
        path = self.run_dir / "decision_boundary.png"
        fig.savefig(path)
        plt.close(fig)
        return path

    def _plot_network(self, plt, network: NeuralNetwork) -> Path:
        sizes = network.layer_sizes
        positions = []
        for layer, size in enumerate(sizes):
            ys = np.arange(1, size + 1) / (size + 1)
            positions.append([(layer + 1.0, y) for y in ys])

        fig, ax = plt.subplots(figsize=(4, 5))
        for layer, W in enumerate(network.weights()):
            for i in range(W.shape[0]):
                for j in range(W.shape[1]):
                    strength = min(abs(float(W[i, j])), MAX_EDGE_WEIGHT)
                    (x0, y0), (x1, y1) = positions[layer][i], positions[layer + 1][j]
                    ax.plot(
                        [x0, x1],
                        [y0, y1],
                        color=CLASS_COLORS[1] if W[i, j] > 0 else CLASS_COLORS[0],
                        alpha=strength / MAX_EDGE_WEIGHT,
                        linewidth=strength * 1.5,
                    )
        for nodes in positions:
            xs, ys = zip(*nodes)
            ax.scatter(xs, ys, s=200, c="#667eea", edgecolors="white", zorder=3)
        labels = ["Input"] + [f"Hidden {n}" for n in range(1, len(sizes) - 1)] + ["Output"]
        ax.set_xticks(range(1, len(sizes) + 1))
        ax.set_xticklabels(labels, fontsize=8)
        ax.set_yticks([])
        ax.set_title("Network")
        path = self.run_dir / "network.png"
        fig.savefig(path)
        plt.close(fig)
        return path


__all__ = ["PlotAdapter"]
