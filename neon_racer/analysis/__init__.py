"""Post-run analysis helpers."""
