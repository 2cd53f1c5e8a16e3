"""rails-tutor: tutorial record store for an AI-driven Rails learning assistant."""

__version__ = "0.1.0"
