"""Android release tooling: version bump, APK variants, GitHub release."""

__version__ = "0.1.0"
