"""Kernel error taxonomy."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of conditions surfaced through the log stream."""

    DUPLICATE_REGISTRATION = "duplicate_registration"
    APPLICATION_NOT_AVAILABLE = "application_not_available"
    REMOTE_LAUNCH_FAILURE = "remote_launch_failure"
    UNIMPLEMENTED_CAPABILITY = "unimplemented_capability"


class KernelError(Exception):
    """Base error carrying its taxonomy kind."""

    kind: ErrorKind = ErrorKind.REMOTE_LAUNCH_FAILURE

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class RemoteLaunchError(KernelError):
    """Any failure inside the remote launch chain."""

    kind = ErrorKind.REMOTE_LAUNCH_FAILURE


class RemoteHostContractError(RemoteLaunchError):
    """The remote host returned a handle missing part of the required surface."""


class UnimplementedCapabilityError(KernelError):
    """A collaborator capability exists only as a placeholder."""

    kind = ErrorKind.UNIMPLEMENTED_CAPABILITY
