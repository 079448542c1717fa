"""Abstract interfaces for external collaborators."""

from .orchestration import IOrchestrationService

__all__ = ["IOrchestrationService"]
