"""Command line entry points for onekp."""
