"""Generate native debug wrapper crates for Anchor Solana programs."""

__version__ = "0.2.1"
__all__ = ["__version__"]