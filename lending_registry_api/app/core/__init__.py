"""Configuration, logging, errors, security and the shared store."""
