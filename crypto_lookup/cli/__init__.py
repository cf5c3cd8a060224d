"""Command-line entry points for crypto_lookup."""
