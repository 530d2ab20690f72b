"""Interactive session features: login, compose, fetch."""
