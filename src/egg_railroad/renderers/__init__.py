"""Renderers: HTML listing, bottlecaps text and SVG railroad diagrams."""
