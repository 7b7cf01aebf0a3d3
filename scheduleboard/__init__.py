"""Weekly schedule board: professionals x time slots, per weekday."""
