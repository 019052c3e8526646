"""Application services: one orchestrator per resource."""
