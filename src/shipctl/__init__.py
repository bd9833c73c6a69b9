"""shipctl: shipment lifecycle, pricing and revenue metrics for a logistics back-office."""

__version__ = "0.3.0"
