#!/usr/bin/env python3
"""
Main entry point for the gral.irc client
"""

from gralirc.main import run

if __name__ == "__main__":
    run()
