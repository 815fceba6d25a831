"""Auth, session serialization and token services."""
