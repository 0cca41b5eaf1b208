"""Models returned to callers of the orchestrator."""
