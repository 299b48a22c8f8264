"""Centralized constants for the ProLingo review engine.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Scheduler ----------
MIN_EASE_FACTOR = 1.3
DEFAULT_EASE_FACTOR = 2.5
EASE_PENALTY = 0.2
FIRST_INTERVAL = 1  # days, after the first successful recall
SECOND_INTERVAL = 6  # days, after the second successful recall
MIN_QUALITY = 0
MAX_QUALITY = 5

# ---------- Time ----------
SECONDS_PER_DAY = 86400
UPCOMING_WINDOW_SECONDS = 24 * 60 * 60

# ---------- Statistics ----------
MASTERY_THRESHOLD = 5  # consecutive correct recalls

# ---------- Pronunciation ----------
PRONUNCIATION_PASS_THRESHOLD = 0.8

# ---------- Lesson Recommender ----------
CEFR_LEVELS = ("A1", "A2", "B1", "B2", "C1", "C2")
DEFAULT_RECOMMENDATION_COUNT = 3
MAX_RECOMMENDATION_CANDIDATES = 10
XP_PER_LEVEL = 1000

# ---------- Queue ----------
DEFAULT_MAX_QUEUE_SIZE = 50
