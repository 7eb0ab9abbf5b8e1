"""Inbound adapters exposing the service."""
