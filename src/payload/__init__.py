"""Log payload encoding.

This package composes the field, metadata, and context transforms
into the encoder that produces wire-ready log payloads.
"""
