"""Exporters for declaration trees."""
