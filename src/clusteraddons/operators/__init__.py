"""Add-on operator plugins."""
