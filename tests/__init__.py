"""Tests for spell_aligner package."""
