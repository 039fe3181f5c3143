"""Interactive terminal client for the RiskAtlas chat API."""
