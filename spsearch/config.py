"""Configuration classes for spsearch components."""

from dataclasses import dataclass
from typing import Tuple

MULTI_EDGE_MODES = ("min", "first")


@dataclass
class SearchConfig:
    """Defaults for graph collaborators, loaders and the search loop."""

    # Edge attribute holding the weight
    weight_attr: str = "cost"

    # Weight used when an edge has no weight attribute
    default_weight: float = 1.0

    # How parallel edges between the same pair resolve to one weight
    multi_edge: str = "min"

    # Log every settled node at DEBUG level
    trace: bool = False

    # Column layout of plain edge-list files
    edgelist_columns: Tuple[str, ...] = ("src", "dst", "cost")

    def validate(self) -> None:
        """Raise ValueError if the configuration is inconsistent."""
        if self.multi_edge not in MULTI_EDGE_MODES:
            raise ValueError(
                f"Unknown multi_edge mode '{self.multi_edge}'; "
                f"expected one of {MULTI_EDGE_MODES}."
            )
        if self.default_weight < 0:
            raise ValueError(
                f"default_weight must be non-negative, got {self.default_weight}."
            )


# Global configuration instance
SEARCH_CONFIG = SearchConfig()
