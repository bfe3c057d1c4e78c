"""Platform abstraction layer."""

from .detection import GradleHost, HostInfo, detect, detect_gradle_host
from .files import atomic_write_bytes, atomic_write_text
from .process import ProcessError, run, run_silent

__all__ = [
    # detection
    "GradleHost",
    "HostInfo",
    "detect",
    "detect_gradle_host",
    # files
    "atomic_write_bytes",
    "atomic_write_text",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
