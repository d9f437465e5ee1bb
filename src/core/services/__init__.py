"""Resolution orchestration services."""
