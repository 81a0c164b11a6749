"""Error types raised by swap-manager actions."""


class SwapManagerError(Exception):
    """Base class; main() turns any of these into a non-zero exit."""


class UsageError(SwapManagerError):
    """Missing/unknown command or flag."""


class SizeParseError(UsageError):
    """Malformed size token."""


class SizeOverflowError(SwapManagerError):
    """Size does not fit in an unsigned 64-bit byte count."""


class PrivilegeError(SwapManagerError):
    pass


class FilesystemError(SwapManagerError):
    pass


class CommandError(SwapManagerError):
    """An external utility could not be run or exited non-zero."""

    def __init__(self, message: str, name: str, returncode: int | None = None):
        super().__init__(message)
        self.name = name
        self.returncode = returncode
