"""
Tour mapping and visualization for TSP solutions.
Creates 2D plots of tours and per-generation frames.
"""

import os
from typing import Dict, List, Optional

import matplotlib.pyplot as plt

from config import VIZ_CONFIG
from tspga.models.solution import Individual
from tspga.models.tsp_model import TSPInstance


def frame_interval(num_epochs: int, max_frames: int = VIZ_CONFIG['max_frames']) -> int:
    """Generations between saved frames so a run produces at most ~max_frames frames."""
    return max(1, num_epochs // max_frames)


class TourMapper:
    """Creates tour visualizations for TSP solutions."""

    def __init__(self, problem: TSPInstance, config: Optional[Dict] = None):
        """
        Initialize tour mapper.

        Args:
            problem: TSP problem instance
            config: Visualization configuration
        """
        self.problem = problem
        self.config = config or VIZ_CONFIG.copy()

        self.fig_size = self.config['figure_size']
        self.dpi = self.config['dpi']
        self.marker_size = self.config['marker_size']
        self.line_width = self.config['line_width']
        self.font_size = self.config['font_size']

    def plot_tour(self, tour: List[int],
                  title: str = "TSP Tour",
                  save_path: Optional[str] = None) -> plt.Figure:
        """
        Plot a closed tour over all cities.

        Args:
            tour: Visiting order
            title: Plot title
            save_path: Optional path to save plot (format from extension)

        Returns:
            Matplotlib figure
        """
        if not tour:
            raise ValueError("Cannot plot empty tour")

        fig, ax = plt.subplots(figsize=self.fig_size, dpi=self.dpi)

        points = self.problem.points
        tour_x = [points[city].x for city in tour] + [points[tour[0]].x]
        tour_y = [points[city].y for city in tour] + [points[tour[0]].y]

        ax.plot(tour_x, tour_y, color=self.config['tour_color'],
                linewidth=self.line_width, label='Tour', zorder=2)

        all_x = [p.x for p in points]
        all_y = [p.y for p in points]
        ax.scatter(all_x, all_y, c=self.config['city_color'], s=self.marker_size,
                   label='Cities', zorder=3)

        ax.set_xlabel('X Coordinate', fontsize=self.font_size)
        ax.set_ylabel('Y Coordinate', fontsize=self.font_size)
        ax.set_title(title, fontsize=self.font_size + 2, fontweight='bold')
        ax.legend(fontsize=self.font_size - 2, loc='upper right')
        ax.grid(True, alpha=0.3)
        ax.set_aspect('equal', adjustable='box')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=self.dpi, bbox_inches='tight')

        return fig

    def plot_individual(self, individual: Individual,
                        title: Optional[str] = None,
                        save_path: Optional[str] = None) -> plt.Figure:
        """Plot an individual's tour, titled with its length by default."""
        if title is None:
            title = f"Best Tour - Length: {individual.fitness:.6f}"
        return self.plot_tour(individual.tour, title=title, save_path=save_path)

    def save_frame(self, individual: Individual, generation: int,
                   frames_dir: str) -> str:
        """
        Save one frame of the evolving best tour as epoch_NNNN.<format>.

        Args:
            individual: Best individual at this generation
            generation: Generation number (0 = initial population)
            frames_dir: Directory for frames (created if missing)

        Returns:
            Path of the saved frame
        """
        os.makedirs(frames_dir, exist_ok=True)
        filename = f"epoch_{generation:04d}.{self.config['frame_format']}"
        path = os.path.join(frames_dir, filename)

        fig = self.plot_tour(individual.tour, title=f"Generation: {generation}",
                             save_path=path)
        plt.close(fig)

        return path
