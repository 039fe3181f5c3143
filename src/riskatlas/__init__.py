"""RiskAtlas knowledge-base chat relay API."""

__version__ = "0.1.0"
