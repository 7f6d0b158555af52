"""File-backed student record manager: record store, credential ledger and activity log."""
