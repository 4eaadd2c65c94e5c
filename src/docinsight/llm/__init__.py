"""Hosted language model clients."""
