# ABOUTME: gamemeta resolves game titles to completion times, critic scores and prices.
# ABOUTME: Exposes the package version for the CLI and packaging metadata.

__version__ = "0.1.0"
