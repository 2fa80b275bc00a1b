"""GitHub pull request review bot backed by an OpenAI-compatible model."""

__version__ = "0.1.0"
