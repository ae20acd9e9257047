"""
Matplotlib renderer for board sessions.

The renderer records one snapshot per draw() call and turns the recording
into a GIF (FuncAnimation + PillowWriter) or a single PNG.
"""

from typing import Any, Dict, List, Optional, Tuple

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.animation import FuncAnimation, PillowWriter

from galton.board.tags import EntityTag
from galton.data.formats import format_frame

BACKGROUND_COLOR = "#1a1a2e"
FIGURE_COLOR = "#0f0f23"


class SceneRenderer:
    """
    Records board frames and renders them.

    Args:
        every: Record only every n-th draw() call
        max_frames: Stop recording after this many frames (None = unbounded)
        size: Output size in pixels (width, height)
    """

    def __init__(self, every: int = 1, max_frames: Optional[int] = None,
                 size: Tuple[int, int] = (400, 400)):
        if every < 1:
            raise ValueError(f"every must be >= 1, got {every}")
        self.every = every
        self.max_frames = max_frames
        self.size = size
        self.lower: Optional[Tuple[float, float]] = None
        self.upper: Optional[Tuple[float, float]] = None
        self.frames: List[Dict[str, Any]] = []
        self._draw_calls = 0

    def init(self, lower: Tuple[float, float], upper: Tuple[float, float]) -> None:
        """Set the bounding rectangle of the playfield."""
        self.lower = tuple(lower)
        self.upper = tuple(upper)

    def draw(self, scene) -> None:
        """Record the current scene."""
        if self.lower is None:
            raise RuntimeError("Renderer used before init()")
        self._draw_calls += 1
        if (self._draw_calls - 1) % self.every:
            return
        if self.max_frames is not None and len(self.frames) >= self.max_frames:
            return
        self.frames.append(format_frame(scene, self._draw_calls))

    # ------------------------------------------------------------------

    def _setup_axes(self):
        fig, ax = plt.subplots(1, 1, figsize=(self.size[0] / 80, self.size[1] / 80), dpi=80)
        ax.set_xlim(self.lower[0], self.upper[0])
        ax.set_ylim(self.lower[1], self.upper[1])
        ax.set_aspect("equal")
        ax.set_facecolor(BACKGROUND_COLOR)
        fig.patch.set_facecolor(FIGURE_COLOR)
        ax.tick_params(left=False, bottom=False, labelleft=False, labelbottom=False)
        for spine in ax.spines.values():
            spine.set_visible(False)
        return fig, ax

    @staticmethod
    def _draw_entities(ax, frame: Dict[str, Any]) -> list:
        artists = []
        for record in frame["entities"]:
            # Far below the playfield
            if record["tag"] == EntityTag.GRAVITY_SOURCE.value:
                continue
            shape = record["shape"]
            color = tuple(record["color"])
            if shape["type"] == "circle":
                center = (record["position"]["x"], record["position"]["y"])
                artist = patches.Circle(center, shape["radius"], color=color, zorder=2)
            else:
                artist = patches.Polygon(shape["vertices"], closed=True, color=color, zorder=1)
            ax.add_patch(artist)
            artists.append(artist)
        return artists

    def render_frame(self, output_path: str, index: int = -1) -> str:
        """Save one recorded frame (default: the last) as an image."""
        if not self.frames:
            raise ValueError("No frames recorded")
        fig, ax = self._setup_axes()
        try:
            self._draw_entities(ax, self.frames[index])
            fig.savefig(output_path, facecolor=fig.get_facecolor())
        finally:
            plt.close(fig)
        return output_path

    def save_gif(self, output_path: str, fps: int = 20) -> str:
        """Render every recorded frame into an animated GIF."""
        if not self.frames:
            raise ValueError("No frames recorded")
        fig, ax = self._setup_axes()
        frame_text = ax.text(self.lower[0] + 1, self.upper[1] - 3, "",
                             color="#aaa", fontsize=7, zorder=10)
        current: list = []

        def update(frame_idx: int):
            for artist in current:
                artist.remove()
            current.clear()
            frame = self.frames[frame_idx]
            current.extend(self._draw_entities(ax, frame))
            frame_text.set_text(f"t={frame['time']:.1f}s")
            return []

        anim = FuncAnimation(fig, update, frames=len(self.frames), blit=False,
                             interval=1000 // fps)
        try:
            anim.save(output_path, writer=PillowWriter(fps=fps))
        finally:
            plt.close(fig)
        return output_path
