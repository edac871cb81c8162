"""ArtChain mint-permit validator."""

__version__ = "0.1.0"
