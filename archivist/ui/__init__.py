"""Console user interface: prompt catalog and reusable components."""
