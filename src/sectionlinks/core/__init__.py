"""Core domain: models, ports, errors and markup helpers."""
