"""Core modules for rinku: prompt parsing, progress, requirements and lookups."""
