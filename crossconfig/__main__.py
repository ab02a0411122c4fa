"""
Entry point for running crossconfig CLI as a module.

Usage: python -m crossconfig [command] [options]
"""

from crossconfig.cli.parser import main

if __name__ == "__main__":
    main()
