"""Domain: exceptions, snapshot models and run reports. No driver imports."""
