"""SQLite persistence for users, meals, rotation, household groups and grocery checks."""
