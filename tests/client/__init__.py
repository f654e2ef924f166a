"""Tests for the story_client package."""
