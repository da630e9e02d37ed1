"""shelfdesk - terminal administration console for a library-management backend."""

__version__ = "0.1.0"
