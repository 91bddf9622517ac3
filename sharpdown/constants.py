from __future__ import annotations

dryRun: bool = False

# Dialect level of the converter.
markdownVersion = "1.13"

# Never survives normalization, so anything carrying it was made by us.
placeholderChar = "\x1a"
htmlBlockKind = "H"
escapeKind = "E"

# Temporarily replaces "://" in text that must not be auto-linked.
autoLinkPreventionMarker = placeholderChar + "P"

tabWidth = 4

# Maximum nesting of [], (), same-name block tags, and tags-inside-tags
# that the patterns will follow.
nestDepth = 6

# Rounds of placeholder expansion a paragraph chunk gets before we give up.
maxUnhashRounds = 50
