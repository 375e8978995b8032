"""Subcommand definitions for the pdftranscript CLI."""
