"""Claude model identifiers.

See https://docs.anthropic.com/en/docs/about-claude/models
"""

from __future__ import annotations

# Claude 4.5
CLAUDE_OPUS_4_5 = "claude-opus-4-5-20251101"
CLAUDE_OPUS_4_5_LATEST = "claude-opus-4-5-latest"
CLAUDE_SONNET_4_5 = "claude-sonnet-4-5-20250929"
CLAUDE_SONNET_4_5_LATEST = "claude-sonnet-4-5-latest"
CLAUDE_HAIKU_4_5 = "claude-haiku-4-5-20251001"
CLAUDE_HAIKU_4_5_LATEST = "claude-haiku-4-5-latest"

# Claude 4
CLAUDE_OPUS_4 = "claude-opus-4-20250514"
CLAUDE_OPUS_4_LATEST = "claude-opus-4-latest"
CLAUDE_SONNET_4 = "claude-sonnet-4-20250514"
CLAUDE_SONNET_4_LATEST = "claude-sonnet-4-latest"

# Claude 3.7
CLAUDE_3_7_SONNET = "claude-3-7-sonnet-20250219"
CLAUDE_3_7_SONNET_LATEST = "claude-3-7-sonnet-latest"

# Claude 3.5
CLAUDE_3_5_SONNET = "claude-3-5-sonnet-20241022"
CLAUDE_3_5_SONNET_LATEST = "claude-3-5-sonnet-latest"
CLAUDE_3_5_HAIKU = "claude-3-5-haiku-20241022"
CLAUDE_3_5_HAIKU_LATEST = "claude-3-5-haiku-latest"

# Claude 3 (legacy)
CLAUDE_3_OPUS = "claude-3-opus-20240229"
CLAUDE_3_OPUS_LATEST = "claude-3-opus-latest"
CLAUDE_3_SONNET = "claude-3-sonnet-20240229"
CLAUDE_3_HAIKU = "claude-3-haiku-20240307"

ALL_MODELS: tuple[str, ...] = (
    CLAUDE_OPUS_4_5,
    CLAUDE_OPUS_4_5_LATEST,
    CLAUDE_SONNET_4_5,
    CLAUDE_SONNET_4_5_LATEST,
    CLAUDE_HAIKU_4_5,
    CLAUDE_HAIKU_4_5_LATEST,
    CLAUDE_OPUS_4,
    CLAUDE_OPUS_4_LATEST,
    CLAUDE_SONNET_4,
    CLAUDE_SONNET_4_LATEST,
    CLAUDE_3_7_SONNET,
    CLAUDE_3_7_SONNET_LATEST,
    CLAUDE_3_5_SONNET,
    CLAUDE_3_5_SONNET_LATEST,
    CLAUDE_3_5_HAIKU,
    CLAUDE_3_5_HAIKU_LATEST,
    CLAUDE_3_OPUS,
    CLAUDE_3_OPUS_LATEST,
    CLAUDE_3_SONNET,
    CLAUDE_3_HAIKU,
)


def is_valid(model: str) -> bool:
    return model in ALL_MODELS


def recommended() -> str:
    """Best balance of cost and capability."""
    return CLAUDE_SONNET_4_5_LATEST


def fast() -> str:
    return CLAUDE_HAIKU_4_5_LATEST


def best() -> str:
    return CLAUDE_OPUS_4_5_LATEST
