"""Models for cluster add-on validation."""
