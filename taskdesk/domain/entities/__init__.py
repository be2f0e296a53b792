"""Domain entities."""

from taskdesk.domain.entities.task import StatusTransition

__all__ = ["StatusTransition"]
