"""Core codevault logic: snippets, configuration and services."""
