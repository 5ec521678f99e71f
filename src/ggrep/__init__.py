"""ggrep — interactive terminal front-end for git grep."""

__version__ = "0.1.0"
