"""Bundled facility data (positions file)."""
