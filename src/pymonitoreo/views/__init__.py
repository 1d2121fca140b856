"""Pure functions that turn cached state into display-ready data."""
