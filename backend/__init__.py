"""Wardrobe API backend package."""
