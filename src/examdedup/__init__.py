"""Entry point, settings and logging for the exam question deduplicator."""
