"""conch-shell: Conch API client and MBO hardware failure reports."""

__version__ = "0.1.0"
