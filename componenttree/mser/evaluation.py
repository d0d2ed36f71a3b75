"""
MSER evaluation: instability scores and local minima along region histories.

Each emitted component becomes an EvaluationNode at its threshold `v`. For
every region that flows into it (the component's own previous region and
each merged child region), an *intermediate* node is placed in between: it
is that region as seen just below `v`, right before it grows or merges.

The history pointer of a node leads to the intermediate of the largest
incoming region, so following history pointers walks down one branch of
the component tree, one level at a time.

Instability score of a region R_v (Matas et al.):

    s(R_v) = (|R_v| - |R_{v - delta}|) / |R_v|

A region is an MSER candidate when its score is a local minimum along its
branch. This is tracked with a small state machine per history link
(see Trend): the score must not rise coming from below (plateaus of equal
size are skipped) and must rise going up to the parent.

Only the last few links of a history are ever read again, so each new node
releases the deeper part of its history (see release_history). Evaluation
memory is bounded by the open components, not by the emissions.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, TypeAlias

import numpy as np

from componenttree.component import MserComponent
from componenttree.ordering import SweepOrder
from componenttree.pixellist import PositionListView
from localtypes import Value

from .node import MserNode


class Trend(Enum):
    """How the score changes across one history link."""

    UNKNOWN = "unknown"
    DESCENDING = "descending"
    FLAT = "flat"
    ASCENDING = "ascending"

    @staticmethod
    def between(lower: float, upper: float) -> Trend:
        """Trend of the score going from the lower to the upper region."""
        if upper < lower:
            return Trend.DESCENDING
        if upper > lower:
            return Trend.ASCENDING
        return Trend.FLAT


MinimumHandler: TypeAlias = Callable[["EvaluationNode"], None]


class EvaluationNode:
    """
    One region of a branch, with its score once enough history is known.

    Attributes:
        value: Threshold of the region.
        size: Number of positions.
        positions: View of the member positions.
        mean, cov: Moments of the member coordinates.
        history: The next region down the branch, None at a branch bottom.
        parent: The region this one flows into, once it is known.
        score: Instability score, None while the history is too short.
        intermediate: Whether the node stands for a region just below `value`.
        msers: Topmost accepted MSER nodes inside this region. Nodes along a
               single-child chain share the same list object.
    """

    __slots__ = (
        "value",
        "size",
        "positions",
        "mean",
        "cov",
        "history",
        "parent",
        "score",
        "intermediate",
        "msers",
    )

    def __init__(
        self,
        value: Value,
        positions: PositionListView,
        mean: np.ndarray,
        cov: np.ndarray,
        history: EvaluationNode | None,
        intermediate: bool,
        msers: list[MserNode],
    ):
        self.value = value
        self.size = len(positions)
        self.positions = positions
        self.mean = mean
        self.cov = cov
        self.history = history
        self.parent: EvaluationNode | None = None
        self.score: float | None = None
        self.intermediate = intermediate
        self.msers = msers

    def __repr__(self) -> str:
        kind = "intermediate" if self.intermediate else "region"
        return f"EvaluationNode({kind}, value={self.value}, size={self.size}, score={self.score})"

    @classmethod
    def below(cls, region: EvaluationNode, value: Value) -> EvaluationNode:
        """The region, seen at the level just below value."""
        node = cls(
            value,
            region.positions,
            region.mean,
            region.cov,
            history=region,
            intermediate=True,
            msers=region.msers,
        )
        region.parent = node
        return node

    @classmethod
    def from_component(
        cls,
        component: MserComponent,
        order: SweepOrder,
        delta: Value,
        on_minimum: MinimumHandler,
    ) -> EvaluationNode:
        """
        Evaluate an emitted component and report the minima it reveals.

        Building the node for a component makes the scores of its incoming
        regions comparable to the next level up, which is exactly what
        deciding whether they are local minima requires.
        """
        value = component.value
        incoming: list[EvaluationNode] = []
        history: EvaluationNode | None = None
        history_size = 0

        if component.evaluation is not None:
            history = cls.below(component.evaluation, value)
            history_size = history.size
            incoming.append(history)
        for child in component.children:
            region = cls.below(child.evaluation, value)
            incoming.append(region)
            if region.size > history_size:
                history, history_size = region, region.size

        mean, cov = component.moments()
        node = cls(
            value,
            component.positions.snapshot(),
            mean,
            cov,
            history=history,
            intermediate=False,
            msers=[],
        )
        for region in incoming:
            region.parent = node
            region.score = region.compute_score(order, delta)

        node.score = node.compute_score(order, delta)
        if node.score is not None:
            for region in incoming:
                if region.is_local_minimum(order, delta):
                    on_minimum(region)

        if len(incoming) == 1:
            node.msers = incoming[0].msers
        else:
            node.msers = [mser for region in incoming for mser in region.msers]

        node.release_history(order, delta)
        component.evaluation = node
        return node

    def release_history(self, order: SweepOrder, delta: Value) -> None:
        """
        Drop the part of the history no later evaluation can read.

        Later regions of this branch lie strictly after `value`, so their
        score walks stop at or above the first ancestor at `value - delta`,
        and their trend walks stop at `history`. Everything below that
        ancestor is released.
        """
        threshold = order.minus_delta(self.value, delta)
        ancestor = self.history
        while ancestor is not None and order.is_after(ancestor.value, threshold):
            ancestor = ancestor.history
        if ancestor is not None:
            ancestor.history = None

    def compute_score(self, order: SweepOrder, delta: Value) -> float | None:
        """
        Score against the region delta levels down the branch.

        Returns None if the branch does not reach that far yet.
        """
        threshold = order.minus_delta(self.value, delta)
        ancestor = self.history
        while ancestor is not None and order.is_after(ancestor.value, threshold):
            ancestor = ancestor.history
        if ancestor is None:
            return None
        # An intermediate sits just below its value: compare with the region
        # just below the threshold too
        if (
            self.intermediate
            and ancestor.value == threshold
            and ancestor.history is not None
        ):
            ancestor = ancestor.history
        return (self.size - ancestor.size) / self.size

    def incoming_trend(self, order: SweepOrder, delta: Value) -> Trend:
        """
        Trend of the score from the next smaller region below this one.

        Regions of equal size are skipped. Without any scored region below,
        the bottom of the branch counts as an unbounded score, provided it is
        more than delta away.
        """
        below = self.history
        while below is not None and below.score is not None and below.size == self.size:
            below = below.history
        if below is None:
            return Trend.UNKNOWN
        if below.score is not None:
            return Trend.between(below.score, self.score)
        if order.is_after(order.minus_delta(self.value, delta), below.value):
            return Trend.DESCENDING
        return Trend.UNKNOWN

    def is_local_minimum(self, order: SweepOrder, delta: Value) -> bool:
        if self.score is None or self.parent is None or self.parent.score is None:
            return False
        incoming = self.incoming_trend(order, delta)
        outgoing = Trend.between(self.score, self.parent.score)
        return (
            incoming in (Trend.DESCENDING, Trend.FLAT)
            and outgoing is Trend.ASCENDING
        )
