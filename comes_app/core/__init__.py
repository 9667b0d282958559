"""Core wiring: extensions, bootstrap, error handling, logging and signals."""
