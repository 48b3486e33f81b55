"""Command line tools for mediaflow."""
