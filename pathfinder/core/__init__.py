"""Configuration, logging and the error taxonomy."""
