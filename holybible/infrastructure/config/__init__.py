"""Configuration loading (environment, .env, YAML) and BibleConfig."""
