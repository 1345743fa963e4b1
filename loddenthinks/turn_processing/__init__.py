"""Turn/action processing helpers.

This package centralizes validation + turn order so every caller goes through
the same legality checks before any state is touched.
"""
