"""Shared constants, errors, logging and settings for unitypackage-extractor."""
