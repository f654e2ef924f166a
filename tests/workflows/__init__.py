"""Tests for the workflow runner and scenarios."""
