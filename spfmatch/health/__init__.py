"""SPFMatch health check."""
