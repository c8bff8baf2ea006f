"""StayFocus sleep service."""
