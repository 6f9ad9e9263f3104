#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/doccompare/options/base.py
"""Base classes for comparison and visualization options.

All options are frozen dataclasses so a single value can be shared freely
between concurrent comparisons.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from doccompare.exceptions import InvalidOptionsError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the option values as a plain dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def validate_choice(name: str, value: Any, allowed: tuple[str, ...]) -> None:
    """Raise InvalidOptionsError unless ``value`` is one of ``allowed``."""
    if value not in allowed:
        raise InvalidOptionsError(name, value, allowed)


def validate_non_negative_int(name: str, value: Any) -> None:
    """Raise InvalidOptionsError unless ``value`` is an int >= 0."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidOptionsError(name, value, message=f"{name} must be a non-negative integer, got {value!r}")
