"""Test fixtures for the mailbox.

This package provides reusable test fixtures:
- mailbox: Email factories, a populated two-thread mailbox scenario
- api: TestClient wired to a fresh MailBox, request payload helpers
"""
