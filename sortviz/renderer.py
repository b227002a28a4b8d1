# renderer.py
#
# Reference display collaborator: keeps bar heights and bar states in sync
# with playback events and writes bar-chart frames to PNG with matplotlib.

import logging
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from . import events
from .style_merger import resolve_styles

logger = logging.getLogger(__name__)


class BarChartRenderer:
    """
    Listener that mirrors the display state.

    Every bar has a height and a style key ('idle', 'compare', 'sorted').
    With `output_dir` set, a frame is saved every `frame_every` display
    events and once more when the run ends.
    """

    def __init__(self, array, styles=None, output_dir=None, frame_every=1, title=None):
        self.heights = list(array)
        self.bar_states = ["idle"] * len(self.heights)
        self.styles = styles or resolve_styles()
        self.output_dir = Path(output_dir) if output_dir else None
        self.frame_every = max(int(frame_every), 1)
        self.title = title
        self.frames = []
        self._event_count = 0
        if self.output_dir:
            self.output_dir.mkdir(parents=True, exist_ok=True)

    def __call__(self, event):
        if isinstance(event, events.RunStarted):
            self.title = self.title or event.algorithm
            self.bar_states = ["idle"] * len(self.heights)
        elif isinstance(event, events.Highlight):
            self._set_states(event.indices, event.kind)
        elif isinstance(event, events.Unhighlight):
            self._set_states(event.indices, "idle")
        elif isinstance(event, events.SetHeight):
            self.heights[event.index] = event.value
        elif isinstance(event, events.MarkSorted):
            self._set_states([event.index], "sorted")
        elif isinstance(event, (events.RunCompleted, events.RunStopped)):
            self._save_if_enabled(force=True)
            return
        else:
            return

        self._event_count += 1
        self._save_if_enabled()

    def _set_states(self, indices, style_key):
        for i in indices:
            if 0 <= i < len(self.bar_states):
                self.bar_states[i] = style_key

    def _color(self, style_key):
        element_styles = self.styles["elementStyles"]
        return element_styles.get(style_key, element_styles["idle"])["fill"]

    def _save_if_enabled(self, force=False):
        if self.output_dir is None:
            return
        if force or self._event_count % self.frame_every == 0:
            self.save_frame(self.output_dir / f"frame_{len(self.frames):05d}.png")

    def save_frame(self, path):
        canvas = self.styles.get("canvas", {})
        fig, ax = plt.subplots(figsize=(10, 4))
        try:
            fig.patch.set_facecolor(canvas.get("background", "#FFFFFF"))
            ax.set_facecolor(canvas.get("background", "#FFFFFF"))
            ax.bar(range(len(self.heights)), self.heights, width=0.9,
                   color=[self._color(s) for s in self.bar_states])
            ax.set_xticks([])
            if self.title:
                ax.set_title(self.title, color=canvas.get("text", "#212121"))
            fig.savefig(path, facecolor=fig.get_facecolor())
        finally:
            plt.close(fig)
        self.frames.append(Path(path))
        logger.debug(f"Frame saved to {path}")
        return Path(path)
