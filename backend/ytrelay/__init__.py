"""YouTube upload relay API."""
