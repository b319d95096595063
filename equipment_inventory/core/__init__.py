"""Configuration, exceptions and the admin gate."""
