"""SVG document, path data and attribute parsing."""
