"""Interactive shell for browsing the filesystem."""
