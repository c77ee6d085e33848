"""Domain core: models, schemas, repositories and services."""
