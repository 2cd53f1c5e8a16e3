"""
Entry point for running rails-tutor as a module.

Usage:
    python -m rails_tutor list
    python -m rails_tutor --help
"""
from .cli.main import main

if __name__ == "__main__":
    main()
