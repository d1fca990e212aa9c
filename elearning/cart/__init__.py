"""Per-account shopping carts."""
