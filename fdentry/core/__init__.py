"""Tokenizer, indexed store and supporting services."""
