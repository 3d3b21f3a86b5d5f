"""Element alarm state distribution data source."""
__version__ = "0.1.0"
