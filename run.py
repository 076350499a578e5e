#!/usr/bin/env python3
"""Entry point for running the Decision Scoring API server."""

from decision_scoring.api.server import main

if __name__ == "__main__":
    main()
