"""
Build parameters of the component tree variants.

Parameters are validated when they are created, so that a bad configuration
is rejected before the sweep starts rather than somewhere inside it.
"""

from dataclasses import dataclass

from componenttree.errors import ConfigurationError
from constants import PRUNE_AFTER_N_MINIMA


def _check_size_range(min_size: int, max_size: int) -> None:
    if min_size < 0 or max_size < 0:
        raise ConfigurationError(
            f"Sizes must be non-negative, got min_size={min_size}, max_size={max_size}"
        )
    if min_size > max_size:
        raise ConfigurationError(
            f"min_size ({min_size}) must not exceed max_size ({max_size})"
        )


@dataclass(frozen=True)
class FilteredParameters:
    """Size window of the filtered component tree (inclusive, in positions)."""

    min_size: int
    max_size: int
    dark_to_bright: bool

    def __post_init__(self) -> None:
        _check_size_range(self.min_size, self.max_size)


@dataclass(frozen=True)
class MserParameters:
    """
    Selection parameters of maximally stable extremal regions.

    Attributes:
        delta: Lag, in value units, between a region and the region its
               instability score is measured against.
        min_size: Smallest accepted region, in positions.
        max_size: Largest accepted region, in positions.
        max_var: Largest accepted instability score.
        min_diversity: A region is pruned when it differs from its parent by
                       at most this fraction of the parent's size.
        dark_to_bright: Sweep direction.
        prune_interval: Accepted regions between two intermediate prunings.
    """

    delta: float
    min_size: int
    max_size: int
    max_var: float
    min_diversity: float
    dark_to_bright: bool
    prune_interval: int = PRUNE_AFTER_N_MINIMA

    def __post_init__(self) -> None:
        _check_size_range(self.min_size, self.max_size)
        if self.delta < 0:
            raise ConfigurationError(f"delta must be non-negative, got {self.delta}")
        if not 0 <= self.min_diversity < 1:
            raise ConfigurationError(
                f"min_diversity must lie in [0, 1), got {self.min_diversity}"
            )
        if self.max_var < 0:
            raise ConfigurationError(f"max_var must be non-negative, got {self.max_var}")
        if self.prune_interval < 1:
            raise ConfigurationError(
                f"prune_interval must be at least 1, got {self.prune_interval}"
            )
