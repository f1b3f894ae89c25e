"""crux_context.config.defaults
============================

Central place for the default values of the context pipeline. These defaults
can be overridden via environment variables, an external configuration file or
in-code overrides (see :mod:`crux_context.config`).

This module intentionally imports nothing from the rest of the package so it
can be used from any layer without circular imports.
"""

from __future__ import annotations

# ---- Budget ----

# Total context window assumed when the model is unknown.
DEFAULT_MAX_CONTEXT_TOKENS = 128000
# Tokens kept free for the model's reply.
DEFAULT_RESERVED_OUTPUT_TOKENS = 4096

# ---- Trimming ----

DEFAULT_TRIM_STRATEGY = "priority-based"
DEFAULT_PRESERVE_RECENT_TURNS = 5

# ---- Summarization ----

DEFAULT_SUMMARIZE_ON_TRUNCATE = False
DEFAULT_SUMMARIZATION_MODE = "rule-based"
DEFAULT_MAX_SUMMARY_TOKENS = 500
DEFAULT_PRESERVE_ERROR_DETAILS = True

# ---- Token estimation ----

DEFAULT_TOKEN_ESTIMATOR = "auto"

# Rolling context is opt-in for the host agent loop.
DEFAULT_ENABLED = False
