"""Command implementations for the modulemap-parser CLI."""
