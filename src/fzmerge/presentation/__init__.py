"""Presentation layer: adapters between the completion session and UIs."""
