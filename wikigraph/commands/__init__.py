"""Command implementations behind the wikigraph CLI."""
