"""Concrete pipeline recipes, one module per CLI subcommand."""
