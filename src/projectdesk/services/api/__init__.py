"""Clients for the hosted backend's auth and REST endpoints."""
