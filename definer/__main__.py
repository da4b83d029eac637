"""
Main entry point for running as module: python -m definer
"""
from definer.cli.cli_interface import cli

if __name__ == '__main__':
    cli()
