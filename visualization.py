"""
Shortest Path GA - Visualization Module
Plots of solver progress and of paths over the distance matrix.
"""

import matplotlib.pyplot as plt
import numpy as np
from typing import Dict, List

from path_core import Path


class PathVisualizer:
    """Visualize paths and optimization progress."""

    def __init__(self, figsize=(12, 8)):
        self.figsize = figsize

    def _finish(self, fig, save_path, show, what):
        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"{what} saved to {save_path}")

        if show:
            plt.show()
        else:
            plt.close(fig)

    def plot_path(
        self,
        path: Path,
        title: str = "Best Path",
        save_path: str = None,
        show: bool = True
    ):
        """
        Plot the distance matrix as a heat map with the path's edges marked.

        Args:
            path: The path to visualize
            title: Plot title
            save_path: Optional path to save the figure
            show: Display the figure instead of closing it
        """
        matrix = path.distance_matrix.matrix
        n = matrix.shape[0]

        fig, ax = plt.subplots(figsize=self.figsize)
        image = ax.imshow(matrix, cmap='viridis')
        fig.colorbar(image, ax=ax, label='Edge weight')

        # Mark each traversed edge (row = from, column = to) with its step number
        for step, (i, j) in enumerate(zip(path.nodes[:-1], path.nodes[1:]), 1):
            ax.scatter([j], [i], c='red', s=250, marker='s',
                       edgecolors='darkred', linewidth=2, zorder=3)
            ax.annotate(str(step), (j, i), ha='center', va='center',
                        color='white', fontsize=9, weight='bold', zorder=4)

        ax.set_xticks(range(n))
        ax.set_yticks(range(n))
        ax.set_xlabel('To node', fontsize=12)
        ax.set_ylabel('From node', fontsize=12)
        ax.set_title(f"{title}\n{path}  (length {path.get_total_distance():.2f})",
                     fontsize=14, weight='bold')

        self._finish(fig, save_path, show, "Path plot")
        return fig

    def plot_convergence(
        self,
        history: List[float],
        title: str = "Convergence History",
        save_path: str = None,
        show: bool = True
    ):
        """
        Plot the best-so-far length per generation as a step line.

        Generations that improved the best length are marked and labelled
        with the new length; a dotted line shows where the final length
        was first reached.

        Args:
            history: Best-so-far length after each generation
            title: Plot title
            save_path: Optional path to save the figure
            show: Display the figure instead of closing it
        """
        fig, ax = plt.subplots(figsize=(10, 6))

        generations = np.arange(1, len(history) + 1)
        improved = improvement_generations(history)
        converged_at = improved[-1]

        ax.step(generations, history, where='post', color='b', linewidth=2, label='Best so far')
        ax.scatter(improved, [history[g - 1] for g in improved], c='red', s=60, zorder=3,
                   label=f'Improvements ({len(improved)})')

        # Label only the last few improvements to keep the plot readable
        for g in improved[-5:]:
            ax.annotate(f"{history[g - 1]:.2f}", (g, history[g - 1]),
                        textcoords='offset points', xytext=(5, 8), fontsize=9)

        ax.axvline(x=converged_at, color='g', linestyle=':', linewidth=1.5,
                   label=f'Final length reached: gen {converged_at}')

        ax.set_xlabel('Generation', fontsize=12)
        ax.set_ylabel('Best Length', fontsize=12)
        ax.set_title(f"{title}\n{history[0]:.2f} -> {history[-1]:.2f} "
                     f"over {len(history)} generations",
                     fontsize=14, weight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=10)

        self._finish(fig, save_path, show, "Convergence plot")
        return fig

    def plot_multiple_convergence(
        self,
        histories: Dict[str, List[float]],
        title: str = "Run Comparison",
        save_path: str = None,
        show: bool = True
    ):
        """Step plots of several runs, each marked where it stopped improving."""
        fig, ax = plt.subplots(figsize=(12, 6))

        colors = ['b', 'r', 'g', 'orange', 'purple']
        finals = []

        for i, (name, history) in enumerate(histories.items()):
            color = colors[i % len(colors)]
            last = improvement_generations(history)[-1]
            finals.append(history[-1])

            ax.step(np.arange(1, len(history) + 1), history, where='post',
                    linewidth=2, color=color,
                    label=f"{name} (Final: {history[-1]:.2f} at gen {last})")
            ax.scatter([last], [history[last - 1]], color=color, marker='D', s=60, zorder=3)

        ax.set_xlabel('Generation', fontsize=12)
        ax.set_ylabel('Best Length', fontsize=12)
        ax.set_title(f"{title}\nFinal lengths {min(finals):.2f} - {max(finals):.2f}",
                     fontsize=14, weight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=10)

        self._finish(fig, save_path, show, "Comparison plot")
        return fig


def improvement_generations(history: List[float]) -> List[int]:
    """1-based generations at which the best-so-far length strictly dropped (the first always counts)."""
    improved = [1] if history else []
    for g in range(1, len(history)):
        if history[g] < history[g - 1]:
            improved.append(g + 1)
    return improved
