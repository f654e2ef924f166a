"""Test fixtures for the Story Spoiler client and workflows.

- story_api: In-memory fake of the Story Spoiler API and client fixtures
"""
