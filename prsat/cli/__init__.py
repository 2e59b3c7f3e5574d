"""Command line tools for PrSAT."""
