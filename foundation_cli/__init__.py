"""
Foundation CLI

Command-line interface for the foundation toolkit.

Usage:
    python -m foundation_cli request GET https://api.example.com/items
    python -m foundation_cli validate data.json --rules rules.yaml
    python -m foundation_cli serve --port 8000
    python -m foundation_cli config --show
"""

__version__ = "0.1.0"
