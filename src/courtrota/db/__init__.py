"""SQLite persistence for session snapshots."""
