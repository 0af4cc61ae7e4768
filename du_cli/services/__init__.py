"""Services (business logic) for du-cli."""

from . import blocks_service
from . import walker_service
from . import aggregate_service

__all__ = ["blocks_service", "walker_service", "aggregate_service"]
