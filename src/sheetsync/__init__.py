"""SheetSync - keep a local sheet library in step with the cloud catalog."""

__version__ = "0.1.0"
