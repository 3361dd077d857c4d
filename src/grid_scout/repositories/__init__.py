"""Document storage for converted series and analytics bundles."""
