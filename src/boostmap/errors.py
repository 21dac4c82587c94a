"""Base exception shared by every boostmap error."""


class BoostError(Exception):
    """Root of the boostmap exception hierarchy."""
