"""Image generation for split wall networks.

This module draws the active walls of a network, highlighting the walls
created by a split and the points they were cut at.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from ..config import (  # noqa: E402
    CHILD_WALL_COLOR,
    IMAGE_DPI,
    SPLIT_POINT_COLOR,
    SPLIT_POINT_MARKER_SIZE,
    WALL_COLOR,
    WALL_WIDTH,
)
from ..core.model import Point  # noqa: E402
from ..engine.network import WallNetwork  # noqa: E402

LOGGER = logging.getLogger(__name__)


def generate_network_image(
    network: WallNetwork,
    output_path: Path,
    split_points: Optional[Dict[str, Iterable[Point]]] = None,
    show_ids: bool = True,
) -> bool:
    """Generate a PNG image of a wall network.

    Args:
        network: The network to draw.
        output_path: Path where to save the PNG image.
        split_points: Cut points per superseded wall id, drawn as markers.
        show_ids: Label every wall with its id.

    Returns:
        True if the image was generated successfully, False otherwise.
    """
    output_path = Path(output_path)
    child_ids = {cid for children in network.lineage.values() for cid in children}

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig, ax = plt.subplots(figsize=(12, 12))

        for wall in network.walls():
            if wall.segment is None:
                continue
            a, b = wall.segment.start, wall.segment.end
            color = CHILD_WALL_COLOR if wall.id in child_ids else WALL_COLOR
            ax.plot([a.x, b.x], [a.y, b.y], color=color, linewidth=WALL_WIDTH)
            if show_ids:
                ax.text((a.x + b.x) / 2, (a.y + b.y) / 2, wall.id, fontsize=7, ha="center", va="bottom")

        for points in (split_points or {}).values():
            for p in points:
                ax.plot(p.x, p.y, "o", color=SPLIT_POINT_COLOR, markersize=SPLIT_POINT_MARKER_SIZE)

        ax.set_aspect("equal", adjustable="box")
        ax.axis("off")
        fig.tight_layout()
        fig.savefig(output_path, dpi=IMAGE_DPI)
        plt.close(fig)
        return True

    except (OSError, ValueError) as e:
        LOGGER.error("Error in image generation: %s", e)
        return False
