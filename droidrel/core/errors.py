"""Process exit codes.

The values are part of the command line contract and must stay stable:
- 0: release published
- 1: the release run failed (build, upload, parse or I/O error)
- 2: the command was misused (unknown variant, bad root or config)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the droidrel command."""

    OK = 0
    RELEASE_FAILED = 1
    USAGE_ERROR = 2
