"""Internal models not exposed to callers of the orchestrator."""
