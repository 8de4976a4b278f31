"""Command groups for the Noruno CLI."""
