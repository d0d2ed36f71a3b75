"""
Builds the three trees of a small synthetic image and prints them.

Run with `python main.py`.
"""

import logging

import numpy as np

from componenttree import (
    build_component_tree,
    build_filtered_component_tree,
    build_mser_tree,
)
from constants import DEBUG
from utils.display import print_forest

logging.basicConfig(
    level=logging.DEBUG if DEBUG else logging.INFO,
    format="%(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


def synthetic_image(size: int = 32, seed: int = 0) -> np.ndarray:
    """Bright background with two dark blobs, one holding a darker core."""
    rng = np.random.default_rng(seed)
    image = np.full((size, size), 200, dtype=np.uint8)
    image[4:14, 4:14] = 80
    image[7:11, 7:11] = 20
    image[18:28, 16:30] = 120
    noise = rng.integers(0, 6, size=image.shape, dtype=np.uint8)
    return image + noise


def main() -> None:
    image = synthetic_image()
    logger.info(f"Image of shape {image.shape}, values {image.min()}..{image.max()}")

    full = build_component_tree(image, dark_to_bright=True)
    logger.info(f"Full component tree has {len(full)} nodes")

    filtered = build_filtered_component_tree(
        image, min_size=10, max_size=400, dark_to_bright=True
    )
    print_forest(filtered, "filtered component tree")

    msers = build_mser_tree(
        image,
        delta=5,
        min_size=10,
        max_size=600,
        max_var=0.5,
        min_diversity=0.2,
        dark_to_bright=True,
    )
    print_forest(msers, "MSER tree")
    for node in msers:
        logger.info(f"MSER {node.describe()} mean={np.round(node.mean, 1)}")


if __name__ == "__main__":
    main()
