"""Disk and output helpers for du-cli."""


def ceil_div(num, den):
    """Integer ceiling of num / den for non-negative num."""
    return -(-num // den)


def format_usage(blocks, path):
    return f"{blocks}\t{path}"
