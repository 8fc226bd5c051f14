"""
Standard exit codes for changes commands.

Following Unix/POSIX conventions for command-line tools.
"""
import sys
from typing import NoReturn, Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
NOT_FOUND = 64           # Requested release does not exist
CONFIG_ERROR = 66        # Configuration file missing or invalid
PERMISSION_ERROR = 67    # Insufficient permissions
DATA_ERROR = 70          # Release metadata could not be decoded
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'DecodeError': DATA_ERROR,
    'AggregationError': DATA_ERROR,
    'NotFoundError': NOT_FOUND,
    'ReleaseExistsError': GENERAL_ERROR,
    'ConfigError': CONFIG_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


def exit_with_code(code: int, message: Optional[str] = None) -> NoReturn:
    """
    Exit with a specific code and optional message.

    Args:
        code: Exit code
        message: Optional message to print to stderr
    """
    if message:
        print(message, file=sys.stderr)
    sys.exit(code)


def exit_for_exception(exc: BaseException) -> NoReturn:
    """Report an exception on stderr and exit with its mapped code."""
    exit_with_code(get_exit_code_for_exception(exc), f"Error: {exc}")


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)
