import click


class CrocOpsError(click.ClickException):
    """Base class for errors that abort a deployment or governance script."""


class ConfigurationError(CrocOpsError):
    """A required environment variable or registry entry is missing."""


class NotFoundError(CrocOpsError):
    """A salt or address lookup missed."""


class PolicyViolation(CrocOpsError):
    """A caller-supplied parameter violates a hard-coded business ceiling."""


class NetworkError(CrocOpsError):
    """An RPC call or transaction submission/confirmation failed."""


class ContractRevertError(CrocOpsError):
    """An on-chain call reverted."""

    def __init__(self, message: str, revert_reason: str = None):
        super().__init__(message)
        self.revert_reason = revert_reason
