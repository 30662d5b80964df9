"""Command-line tools: ``erc3``, ``erc3-store`` and ``erc3-demo``."""
