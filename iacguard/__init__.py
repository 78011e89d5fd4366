"""Platform detection, exit-code policy, output settings and a small command line for infrastructure-as-code scanning."""

__version__ = "0.1.0"

__all__ = [
    "analyzer",
    "cli",
    "constants",
    "exit_handler",
    "helpers",
    "metrics",
    "printer",
    "storage",
    "tracker",
]