"""Cross-cutting building blocks: error taxonomy, validation and logging."""
