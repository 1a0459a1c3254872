"""Shared fixtures for arcade tests."""

import os

# ArcadeServerSettings requires a seed secret. Set a test default before any
# settings object is instantiated.
os.environ.setdefault("ARCADE_SEED_SECRET", "test-seed-secret")
