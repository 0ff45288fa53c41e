"""Calculator version stamped on exported manifests and statements."""

VERSION = "2025.11.03"
