"""Database provisioning and backup tooling for the Prehistoric Liberia VR app."""

__version__ = "1.0.0"
