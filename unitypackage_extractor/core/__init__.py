"""Archive-to-tree reconstruction for .unitypackage files."""
