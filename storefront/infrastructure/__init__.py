"""Infrastructure layer - configuration, logging, security, database."""
