"""Core package: result types, errors, enums, configuration, container."""
