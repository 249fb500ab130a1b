"""Tests for exception hierarchy."""

from day_agent.exceptions import (
    CloudError,
    DayAgentError,
    EntitlementError,
    LLMError,
    NavigationError,
    PersistenceError,
    ProviderError,
    SyncInProgressError,
    SyncStepError,
)


def test_all_inherit_from_base():
    for exc_class in [
        ProviderError,
        PersistenceError,
        NavigationError,
        LLMError,
        CloudError,
        EntitlementError,
        SyncInProgressError,
        SyncStepError,
    ]:
        assert issubclass(exc_class, DayAgentError)


def test_cloud_hierarchy():
    assert issubclass(EntitlementError, CloudError)
    assert issubclass(SyncInProgressError, CloudError)
    assert issubclass(SyncStepError, CloudError)


def test_sync_step_error_carries_step():
    error = SyncStepError("push", "Push failed: timeout")

    assert error.step == "push"
    assert str(error) == "Push failed: timeout"
