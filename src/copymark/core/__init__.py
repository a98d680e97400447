# topmark:header:start
#
#   project      : CopyMark
#   file         : __init__.py
#   file_relpath : src/copymark/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, UI-agnostic building blocks shared across CopyMark packages."""
