"""Configuration, clock, errors and store interfaces."""
