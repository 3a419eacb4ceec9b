"""
Errors raised by the detection pipeline and the override store.

Every error carries a message that is safe to show to an end user.
"""


class SubwatchError(Exception):
    """Base class for all recoverable subwatch errors."""


class InputUnavailable(SubwatchError):
    """The transaction ledger could not be read."""


class OverrideStoreUnavailable(SubwatchError):
    """Hidden-merchant overrides could not be read."""


class WriteFailure(SubwatchError):
    """A hide/unhide write was not persisted."""

    def __init__(self, merchant_key: str, action: str):
        self.merchant_key = merchant_key
        self.action = action
        super().__init__(f"Could not {action} '{merchant_key}'. Please try again.")


class MalformedTransaction(SubwatchError):
    """A ledger row is missing its description or date."""


class DetectionCancelled(SubwatchError):
    """A detection run was abandoned by its caller."""
