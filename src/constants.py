#!/usr/bin/env python3
"""
Centralized constants for the ApexDoc extractor.

This module contains the comment markers, tag names and file-processing
defaults used throughout the codebase so they are defined in one place.
"""

# Comment markers
BLOCK_DOC_OPEN = "/**"
BLOCK_DOC_CLOSE = "*/"
LINE_DOC_PREFIX = "///"
CONTINUATION_MARKER = "*"
# Reserved for a future ApexDoc surface syntax; matched anywhere in the text.
RESERVED_DOC_MARKER = "@apexdoc"

# Tag names with dedicated fields on DocComment
PARAM_TAG = "param"
RETURN_TAG = "return"
AUTHOR_TAG = "author"
DEPRECATED_TAG = "deprecated"

# Token channels
DEFAULT_CHANNEL = 0
HIDDEN_CHANNEL = 1

# File Processing
SUPPORTED_APEX_EXTENSIONS = {".cls", ".trigger"}
MAX_FILE_SIZE_MB = 10

# Defaults; APEXDOC_* environment variables and CLI flags override them.
DEFAULT_PARALLEL_FILES = 8
DEFAULT_LOG_LEVEL = "INFO"
