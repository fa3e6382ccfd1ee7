"""Infrastructure layer — SQLite persistence and hierarchy graph."""
