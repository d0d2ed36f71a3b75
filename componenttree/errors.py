"""
Exceptions raised by the component tree builders.

Configuration and capacity problems are detected before the sweep starts;
a build never fails half-way through because of them.
"""


class ComponentTreeError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(ComponentTreeError, ValueError):
    """Build parameters that cannot describe a valid tree."""


class CapacityError(ComponentTreeError, OverflowError):
    """More positions than the position arena can address."""


class PositionListError(ComponentTreeError, RuntimeError):
    """Use of a position list after it was merged into another one."""
