"""Commerce record keeping, pricing and renewal-order derivation."""

__version__ = "0.1.0"
