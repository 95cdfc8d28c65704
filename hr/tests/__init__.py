"""
Tests for the hr package.
"""
