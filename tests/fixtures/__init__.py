"""Test doubles for the update pipeline collaborators.

- ``FakeRunner``: scripted command results keyed by argument prefix
- ``StaticLocator`` / ``StaticChecker``: fixed repository and staleness answers
- ``ScriptedPrompter``: canned confirmation answers
"""
