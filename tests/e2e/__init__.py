"""Live tests against the Story Spoiler API."""
