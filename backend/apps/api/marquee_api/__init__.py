"""Marquee API application."""
