"""Render an orbit to PNG for eyeballing layouts while tuning ring constants.

Not used by the API; handy from a shell:

    png = render_orbit(friends, layout, positions, 800, 600)
    Path("orbit.png").write_bytes(png)
"""

from __future__ import annotations

import io
from collections.abc import Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.patheffects as pe
import matplotlib.pyplot as plt

from orbit.engine.icons import IconColor, Shape, classify, format_closeness, icon_size
from orbit.engine.layout import FriendPosition, RingLayout
from orbit.models.friend import Friend
from orbit.utils.geometry import viewport_center

# ── Style ───────────────────────────────────────────────────────────

BG = "#0f0f1a"
RING = "#2a2a40"
TEXT = "#eee"
SUBTLE = "#777"
ACCENT = "#e94560"

COLORS = {
    IconColor.BLUE: "#45B7D1",
    IconColor.TEAL: "#4ECDC4",
    IconColor.GREEN: "#96CEB4",
    IconColor.YELLOW_GREEN: "#C5E17A",
    IconColor.ORANGE: "#F0A500",
    IconColor.RED: "#FF6B6B",
}

MARKERS = {
    Shape.DOT: "o",
    Shape.SQUARE: "s",
    Shape.HEXAGON: "h",
    Shape.FLOWER: "p",
    Shape.STAR8: "*",
    Shape.STAR12: (12, 1, 0),  # 12-point star
}

stroke = [pe.withStroke(linewidth=2, foreground=BG)]


def hide(ax) -> None:
    for s in ax.spines.values():
        s.set_visible(False)
    ax.tick_params(left=False, bottom=False, labelleft=False, labelbottom=False)


def render_orbit(
    friends: Sequence[Friend],
    layout: RingLayout,
    positions: Sequence[FriendPosition],
    width: float,
    height: float,
    dpi: int = 100,
) -> bytes:
    """PNG bytes of the rings plus every positioned friend's icon."""
    fig, ax = plt.subplots(figsize=(max(width, 1) / dpi, max(height, 1) / dpi), dpi=dpi)
    try:
        _draw(ax, fig, friends, layout, positions, width, height)
        buf = io.BytesIO()
        fig.savefig(buf, format="png", dpi=dpi, facecolor=BG)
    finally:
        plt.close(fig)
    return buf.getvalue()


def _draw(
    ax,
    fig,
    friends: Sequence[Friend],
    layout: RingLayout,
    positions: Sequence[FriendPosition],
    width: float,
    height: float,
) -> None:
    fig.patch.set_facecolor(BG)
    ax.set_facecolor(BG)
    ax.set_xlim(0, max(width, 1))
    ax.set_ylim(max(height, 1), 0)  # screen coordinates: y grows downward
    ax.set_aspect("equal")
    hide(ax)

    cx, cy = viewport_center(width, height)
    ax.plot([cx], [cy], marker="o", color=ACCENT, markersize=6)
    for radius in layout.radii:
        ax.add_patch(plt.Circle((cx, cy), radius, fill=False, color=RING, linewidth=0.8))

    by_id = {f.id: f for f in friends}
    for pos in positions:
        friend = by_id.get(pos.id)
        closeness = friend.closeness if friend else 0.0
        key = classify(closeness)
        ax.scatter(
            [pos.x],
            [pos.y],
            marker=MARKERS[key.shape],
            s=icon_size(closeness) ** 2,
            color=COLORS[key.color],
            edgecolors=BG,
            zorder=3,
        )
        label = f"{friend.name or friend.id} {format_closeness(closeness)}" if friend else pos.id
        ax.text(
            pos.x,
            pos.y + icon_size(closeness),
            label,
            color=TEXT,
            fontsize=7,
            ha="center",
            va="top",
            path_effects=stroke,
        )

    if not positions:
        ax.text(cx, cy + 20, "no friends yet", color=SUBTLE, fontsize=9, ha="center")

