"""Resolve cloud and local repository workspaces to local checkouts."""
