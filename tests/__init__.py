"""
Tests for the Pocket Calculator engine.
"""
