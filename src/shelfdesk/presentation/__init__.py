"""Presentation layer: Textual widgets and the admin console app."""
