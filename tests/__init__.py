"""Test suite for the story client and acceptance workflows."""
