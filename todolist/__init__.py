"""A terminal-based todo list with local YAML storage."""
