"""Core domain: errors, logging, models, repositories, schemas and services."""
