"""Cost Forecast Service HTTP application."""
