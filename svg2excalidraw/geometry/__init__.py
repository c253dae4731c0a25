"""Affine transforms, curve sampling and element positioning."""
