"""Tests for copilot-relay."""
