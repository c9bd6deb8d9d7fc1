"""Burpp service marketplace API."""
