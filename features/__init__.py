"""Feature packages: auth and dashboard."""
