"""
Configuration constants for manifests, discovery and bundle output
"""

# Manifest
BUILD_FILE = "build.toml"
MANIFEST_SUFFIXES = (".toml", ".yaml", ".yml")
DEFAULT_REQUIRE_FUNCTION = "require"
DEFAULT_PROJECT_NAME = "a"
DEFAULT_OUTPUT_DIR = "build"
DEFAULT_ROOTS = ("",)

# Discovery
SOURCE_EXTENSIONS = (".py",)
PACKAGE_INIT_STEMS = ("__init__", "init")
INIT_MODULE_NAME = "init"
IGNORED_DIRECTORIES = ("__pycache__",)

# Bundle output
BUNDLE_SUFFIX = ".py"
BUNDLE_SHEBANG = "#!/usr/bin/env python3"
BUNDLE_HEADER = "# Generated by monobundle. Do not edit."

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"
