"""Infrastructure - configuration, logging, database wiring."""
