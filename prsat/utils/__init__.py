"""Shared helpers: exceptions, s-expressions and parallel execution."""
