"""
Mood NFT - a token registry whose metadata reflects each token's mood.

This package provides an in-memory mood registry, a metadata encoder that
renders self-contained ``data:`` token URIs, and an HTTP API and CLI on top.
"""

__version__ = "0.1.0"
