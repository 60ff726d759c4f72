"""Intel uncore performance monitoring: register layouts, MSR access and metrics."""

__version__ = "2.0.0"