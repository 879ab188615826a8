"""beadboard: query language and dependency analytics for a beads kanban board."""

__version__ = "0.1.0"
