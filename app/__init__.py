"""Task coordinator service."""
