"""Test doubles for the relay tests."""
