"""Android release: version bump, variant builds, GitHub publication."""
