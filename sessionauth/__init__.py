"""Session-based authentication service: registration, login, guards and session serialization."""
