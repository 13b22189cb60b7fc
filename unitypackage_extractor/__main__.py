#!/usr/bin/env python3
"""
Main entry point for the UnityPackage extractor when run as a module.

This allows the package to be executed with: python -m unitypackage_extractor
"""

from .cli import main

if __name__ == '__main__':
    main()
