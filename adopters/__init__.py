"""Discover repositories that adopted a build tool and chart their growth."""

__version__ = "0.1.0"
