"""Unified exception hierarchy for day-agent."""


class DayAgentError(Exception):
    """Base exception for all day-agent errors."""


# Briefing
class ProviderError(DayAgentError):
    """A mail, calendar or task source failed during aggregation."""


class PersistenceError(DayAgentError):
    """The baseline store could not be read or written."""


class NavigationError(DayAgentError):
    """A suggestion carried a target type nothing can navigate to."""


# LLM
class LLMError(DayAgentError):
    """Base exception for LLM client operations."""


# Cloud
class CloudError(DayAgentError):
    """Base exception for cloud sync operations."""


class EntitlementError(CloudError):
    """Sync attempted by a user without a premium subscription."""


class SyncInProgressError(CloudError):
    """A sync was requested while another one is still running."""


class SyncStepError(CloudError):
    """The pull or push step of a sync failed.

    Args:
        step: ``"pull"``, ``"push"`` or ``"status"``.
    """

    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step
