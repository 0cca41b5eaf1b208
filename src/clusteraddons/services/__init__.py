"""Services implementing the validation engine."""
