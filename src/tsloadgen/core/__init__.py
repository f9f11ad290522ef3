"""Core domain: models, ports, configuration and the generation pipeline."""
