"""Command line interface for typed-intl."""
