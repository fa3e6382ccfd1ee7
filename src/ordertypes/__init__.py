"""ordertypes — order type taxonomy validation and storage."""

__version__ = "0.1.0"
