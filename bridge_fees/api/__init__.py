"""HTTP API for the bridge fee calculator."""
