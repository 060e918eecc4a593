"""Clients for the external services the deployer check reads from."""
