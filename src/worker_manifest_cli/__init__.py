"""Command line interface for worker-manifest."""
