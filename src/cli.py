#!/usr/bin/env python3
"""Main CLI entry point for the cricket league system."""

from cricket_league.cli.main import app

if __name__ == '__main__':
    app()
