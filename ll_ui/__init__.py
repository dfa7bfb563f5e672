"""Typer CLI and Rich presenters for llm-launcher."""
