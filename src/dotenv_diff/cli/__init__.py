"""Command line interface for dotenv-diff."""
