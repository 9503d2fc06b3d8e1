"""Git collaborators: locating clones on disk and opening repositories."""
