"""
Nodes of the MSER tree.
"""

from dataclasses import dataclass, field

import numpy as np

from componenttree.tree import TreeNode


@dataclass(eq=False)
class MserNode(TreeNode):
    """
    A maximally stable extremal region of the array thresholded at `value`.

    Attributes:
        score: Instability score (|R_i| - |R_{i-delta}|) / |R_i|.
        mean: Mean position vector (x, y, z, ...) of the region.
        cov: Independent elements of the covariance matrix of the positions
             (xx, xy, xz, ..., yy, yz, ..., zz, ...).
    """

    score: float = field(default=0.0, kw_only=True)
    mean: np.ndarray = field(default_factory=lambda: np.zeros(0), kw_only=True, repr=False)
    cov: np.ndarray = field(default_factory=lambda: np.zeros(0), kw_only=True, repr=False)

    def describe(self) -> str:
        return f"value={self.value} size={self.size} score={self.score:.3f}"
