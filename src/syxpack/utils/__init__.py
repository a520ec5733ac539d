"""Byte-level payload codecs."""
