"""Exceptions that abort a provisioning run.

Anything derived from ProvisionError is fatal: the runner reports it and
exits non-zero. Best-effort steps never raise these; they log and continue.
"""


class ProvisionError(Exception):
    """Base class for fatal provisioning errors."""
    exit_code = 1


class OSReleaseNotFoundError(ProvisionError):
    """Raised when /etc/os-release is missing."""
    pass


class UnsupportedDistributionError(ProvisionError):
    """Raised when the host does not belong to a supported family."""
    pass


class NoInteractiveInputError(ProvisionError):
    """Raised when a value must be prompted for but stdin is not a TTY."""
    pass


class CommandError(ProvisionError):
    """Raised when a mandatory command exits non-zero."""

    def __init__(self, cmd, returncode: int, output: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"Command failed (exit {returncode}): {' '.join(self.cmd)}"
        )

    @property
    def exit_code(self) -> int:
        # Signals show up as negative return codes.
        return self.returncode if self.returncode > 0 else 1
