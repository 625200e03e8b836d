"""
Core domain models, numerical primitives, configuration and contracts.

This package contains the integration engine and the building blocks it
depends on; it has no knowledge of the function catalog or the CLI.
"""
