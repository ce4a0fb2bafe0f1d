"""Tests for provisio."""
